# *-* coding: utf-8 *-*
from asn1crypto import x509


def signer_email(cert: x509.Certificate) -> str:
    """Value of the emailAddress (1.2.840.113549.1.9.1) subject attribute, or ''."""
    email = ''
    for rdn in cert.subject.chosen:
        for type_value in rdn:
            if type_value['type'].native == 'email_address':
                email = type_value['value'].native
    return email


def addresses_match(signer: str, from_address: str) -> bool:
    # exact comparison, no case folding
    return bool(signer) and signer == from_address
