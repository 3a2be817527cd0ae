# *-* coding: utf-8 *-*
import base64
import functools

from asn1crypto import algos, cms
from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import dsa, padding
from cryptography.hazmat.primitives.serialization import pkcs7

import test_cert

BOUNDARY = b'----46F1AAD10BE922477643C0A33C40D389'
SENDER = 'alice@example.com'

BODY = b'''\
Content-Type: text/plain; charset="utf-8"
Content-Transfer-Encoding: 7bit

Hello Bob,

this message carries an S/MIME signature.
'''


@functools.lru_cache(maxsize=None)
def alice() -> tuple:
    return test_cert.CA.shared().user_create(SENDER, commonname='Alice')


@functools.lru_cache(maxsize=None)
def alice_ec() -> tuple:
    ca = test_cert.CA.shared()
    return ca.user_create(SENDER, key=ca.key_create_ec(), commonname='Alice EC')


def canonical(datau: bytes) -> bytes:
    return datau.replace(b'\r\n', b'\n').replace(b'\n', b'\r\n')


def sign(datau: bytes, key, cert: x509.Certificate, hashalgo=None, attrs=True, certs=True, pss=False) -> bytes:
    """Detached CMS signature (DER) over the canonical form of datau."""
    options = [pkcs7.PKCS7Options.DetachedSignature, pkcs7.PKCS7Options.Binary]
    if not attrs:
        options.append(pkcs7.PKCS7Options.NoAttributes)
    if not certs:
        options.append(pkcs7.PKCS7Options.NoCerts)
    hashalgo = hashalgo or hashes.SHA256()
    signer_kwargs = {}
    if pss:
        signer_kwargs['rsa_padding'] = padding.PSS(
            mgf=padding.MGF1(hashalgo), salt_length=padding.PSS.DIGEST_LENGTH
        )
    builder = pkcs7.PKCS7SignatureBuilder().set_data(canonical(datau)).add_signer(
        cert, key, hashalgo, **signer_kwargs
    )
    return builder.sign(serialization.Encoding.DER, options)


def email(
    datau: bytes,
    datas: bytes,
    sender: str = 'Alice <%s>' % SENDER,
    protocol: bytes = b'"application/pkcs7-signature"',
    micalg: bytes = b'"sha-256"',
    sigtype: bytes = b'application/pkcs7-signature',
    newline: bytes = b'\n',
) -> bytes:
    headers = b''
    if sender is not None:
        headers = b'From: ' + sender.encode('utf-8') + b'\n'
    s = headers + b'''\
To: Bob <bob@example.com>
Subject: signed
MIME-Version: 1.0
Content-Type: multipart/signed; protocol=%s; micalg=%s; boundary="%s"

This is an S/MIME signed message

--%s
%s
--%s
Content-Type: %s; name="smime.p7s"
Content-Transfer-Encoding: base64
Content-Disposition: attachment; filename="smime.p7s"

%s
--%s--

''' % (protocol, micalg, BOUNDARY, BOUNDARY, datau, BOUNDARY, sigtype, base64.encodebytes(datas), BOUNDARY)
    return s.replace(b'\n', newline)


def signed_email(key=None, cert=None, datau: bytes = BODY, **kwargs) -> bytes:
    """Sign datau and wrap it in a multipart/signed message."""
    if key is None:
        key, cert = alice()
    sign_kwargs = {k: kwargs.pop(k) for k in ('hashalgo', 'attrs', 'certs', 'pss') if k in kwargs}
    return email(datau, sign(datau, key, cert, **sign_kwargs), **kwargs)


def rewrite(datas: bytes, signer=None, certificate=None) -> bytes:
    """
    Re-encode a signature after editing it.

    :param signer: Callable receiving the first SignerInfo to modify in place.
    :param certificate: asn1crypto certificate replacing the certificate set.
    """
    content_info = cms.ContentInfo.load(datas)
    signed_data = content_info['content']
    if signer is not None:
        signer(signed_data['signer_infos'][0])
    if certificate is not None:
        signed_data['certificates'] = cms.CertificateSet([
            cms.CertificateChoices(name='certificate', value=certificate),
        ])
    return content_info.dump(force=True)


def drop_message_digest(signer_info):
    signer_info['signed_attrs'] = cms.CMSAttributes([
        attr for attr in signer_info['signed_attrs'] if attr['type'].native != 'message_digest'
    ])


def dsa_signature_algorithm(signer_info):
    signer_info['signature_algorithm'] = algos.SignedDigestAlgorithm({'algorithm': 'sha256_dsa'})


def dsa_twin(cert: x509.Certificate):
    """Certificate with the issuer and serial of cert but a DSA public key."""
    key = dsa.generate_private_key(key_size=2048)
    twin = (
        x509.CertificateBuilder()
        .subject_name(cert.subject)
        .issuer_name(cert.issuer)
        .public_key(key.public_key())
        .serial_number(cert.serial_number)
        .not_valid_before(cert.not_valid_before_utc)
        .not_valid_after(cert.not_valid_after_utc)
        .sign(key, hashes.SHA256())
    )
    return test_cert.asn(twin)
