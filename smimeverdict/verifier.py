# *-* coding: utf-8 *-*
import asyncio
import logging
import hashlib
import functools

from asn1crypto import x509, core, cms

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import padding, ec, rsa
from cryptography import x509 as cx509

from smimeverdict.errors import SignatureVerificationError

logger = logging.getLogger(__name__)


def canonicalize(datau: bytes) -> bytes:
    """Convert every line terminator to CRLF as S/MIME signing does."""
    return datau.replace(b'\r\n', b'\n').replace(b'\n', b'\r\n')


def signer_certificate(signed_data: cms.SignedData, index: int) -> x509.Certificate:
    try:
        sid = signed_data['signer_infos'][index]['sid']
    except IndexError:
        raise SignatureVerificationError('no signer with index %d' % index)
    certificates = signed_data['certificates']
    if isinstance(certificates, core.Void):
        certificates = []
    for choice in certificates:
        if choice.name != 'certificate':
            continue
        cert = choice.chosen
        if sid.name == 'issuer_and_serial_number':
            if (
                cert.serial_number == sid.chosen['serial_number'].native
                and cert.issuer == sid.chosen['issuer']
            ):
                return cert
        elif sid.name == 'subject_key_identifier':
            if cert.key_identifier == sid.chosen.native:
                return cert
    raise SignatureVerificationError('signer certificate not found')


def _hash(algo):
    try:
        return getattr(hashes, algo.upper())()
    except AttributeError:
        raise SignatureVerificationError('unsupported digest algorithm %s' % algo)


def _verify_signature(public_key, sigalgo, algo, signature, signedData):
    sigalgoname = sigalgo.signature_algo
    if isinstance(public_key, ec.EllipticCurvePublicKey):
        public_key.verify(signature, signedData, ec.ECDSA(_hash(algo)))
    elif not isinstance(public_key, rsa.RSAPublicKey):
        raise SignatureVerificationError('unsupported public key %s' % type(public_key).__name__)
    elif sigalgoname == 'rsassa_pss':
        parameters = sigalgo['parameters']
        salgo = parameters['hash_algorithm'].native['algorithm']
        mgfname = parameters['mask_gen_algorithm'].native['algorithm']
        if mgfname != 'mgf1':
            raise SignatureVerificationError('unsupported mask generation %s' % mgfname)
        mgfalgo = parameters['mask_gen_algorithm']['parameters']['algorithm'].native
        salt_length = parameters['salt_length'].native
        public_key.verify(
            signature,
            signedData,
            padding.PSS(padding.MGF1(_hash(mgfalgo)), salt_length),
            _hash(salgo),
        )
    elif sigalgoname == 'rsassa_pkcs1v15':
        public_key.verify(signature, signedData, padding.PKCS1v15(), _hash(algo))
    else:
        raise SignatureVerificationError('unknown signature algorithm %s' % sigalgoname)


def verify_signer(signed_data: cms.SignedData, index: int, datau: bytes) -> bool:
    """
    Check one SignerInfo of a detached signature.

    :param signed_data: Decoded SignedData.
    :param index: Signer index.
    :param datau: Signed content, already canonicalized.
    :return: True if both the content digest and the signature match.
    :raise SignatureVerificationError: for algorithms or structures that cannot be evaluated.
    """
    cert = signer_certificate(signed_data, index)
    signer_info = signed_data['signer_infos'][index]
    try:
        signature = signer_info['signature'].native
        algo = signer_info['digest_algorithm']['algorithm'].native
        attrs = signer_info['signed_attrs']
        try:
            mdData = getattr(hashlib, algo)(datau).digest()
        except AttributeError:
            raise SignatureVerificationError('unsupported digest algorithm %s' % algo)
        if attrs is not None and not isinstance(attrs, core.Void):
            mdSigned = None
            for attr in attrs:
                if attr['type'].native == 'message_digest':
                    mdSigned = attr['values'].native[0]
            if mdSigned is None:
                raise SignatureVerificationError('signed attributes without message digest')
            signedData = attrs.dump()
            signedData = b'\x31' + signedData[1:]
        else:
            mdSigned = mdData
            signedData = datau
        if mdData != mdSigned:
            logger.debug('content digest does not match the signed message digest')
            return False

        public_key = cx509.load_der_x509_certificate(cert.dump()).public_key()
        sigalgo = signer_info['signature_algorithm']
        try:
            _verify_signature(public_key, sigalgo, algo, signature, signedData)
        except InvalidSignature:
            logger.debug('signature does not match the signed data')
            return False
    except (UnsupportedAlgorithm, ValueError, TypeError, KeyError) as ex:
        if isinstance(ex, SignatureVerificationError):
            raise
        raise SignatureVerificationError('signature cannot be evaluated: %s' % ex) from ex
    return True


async def verify_signature(envelope, datau: bytes, index: int = 0) -> bool:
    """
    Verify a signer of the envelope without blocking the calling thread.

    :param envelope: SignedDataEnvelope to check.
    :param datau: Raw signed content, canonicalized here.
    :param index: Signer index.
    :return: True if verified, False if the signature does not match.
    :raise SignatureVerificationError: when the result is indeterminate.
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(
        None, functools.partial(envelope.verify, index, canonicalize(datau))
    )
