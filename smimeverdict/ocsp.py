# *-* coding: utf-8 *-*
"""
OCSP request construction.

Diagnostic helper only: nothing here is sent anywhere and the result never
changes a verification verdict.
"""
import os

from asn1crypto import x509
from cryptography import x509 as cryptography_x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.x509 import ocsp as cryptography_ocsp

NONCE_SIZE = 16


def _load(cert):
    if isinstance(cert, x509.Certificate):
        return cryptography_x509.load_der_x509_certificate(cert.dump())
    return cert


def ocsp_url(cert):
    """Extract OCSP URL from certificate's Authority Information Access extension"""
    crypto_cert = _load(cert)
    try:
        aia = crypto_cert.extensions.get_extension_for_oid(
            cryptography_x509.oid.ExtensionOID.AUTHORITY_INFORMATION_ACCESS)
    except cryptography_x509.ExtensionNotFound:
        return None
    for access_description in aia.value:
        if access_description.access_method == cryptography_x509.oid.AuthorityInformationAccessOID.OCSP:
            return access_description.access_location.value
    return None


def find_issuer(cert: x509.Certificate, certs: list):
    """Issuer of cert among certs, cert itself when it is self-issued, else None."""
    if cert.self_issued:
        return cert
    for other in certs:
        if other.subject == cert.issuer:
            return other
    return None


def build_request(cert, issuer, nonce: bool = True) -> bytes:
    """
    Build a DER encoded OCSP request for cert.

    Every call returns a new buffer with its own nonce.

    :param cert: Certificate to ask about (asn1crypto or cryptography).
    :param issuer: Issuer of cert (asn1crypto or cryptography).
    :param nonce: Add a random nonce extension.
    :return: DER bytes of the OCSPRequest.
    """
    builder = cryptography_ocsp.OCSPRequestBuilder()
    builder = builder.add_certificate(_load(cert), _load(issuer), hashes.SHA1())
    if nonce:
        builder = builder.add_extension(cryptography_x509.OCSPNonce(os.urandom(NONCE_SIZE)), critical=False)
    req = builder.build()
    return req.public_bytes(serialization.Encoding.DER)
