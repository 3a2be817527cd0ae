# *-* coding: utf-8 *-*
import logging

from asn1crypto import cms, core, x509

from smimeverdict import verifier
from smimeverdict.errors import MalformedSignatureError

logger = logging.getLogger(__name__)


class SignedDataEnvelope(object):
    """Decoded CMS SignedData carried by a signature part."""

    def __init__(self, signed_data: cms.SignedData):
        self.signed_data = signed_data
        self.certificates = []
        certificates = signed_data['certificates']
        if not isinstance(certificates, core.Void):
            for choice in certificates:
                if choice.name != 'certificate':
                    logger.debug(f'skipping {choice.name} entry of the certificate set')
                    continue
                self.certificates.append(choice.chosen)
        self.digest_algorithms = frozenset(
            algo['algorithm'].native for algo in signed_data['digest_algorithms']
        )

    @property
    def signer_infos(self) -> cms.SignerInfos:
        return self.signed_data['signer_infos']

    def signer_certificate(self, index: int) -> x509.Certificate:
        return verifier.signer_certificate(self.signed_data, index)

    def verify(self, index: int, datau: bytes) -> bool:
        """
        Verify one signer against the signed content.

        :param index: Position of the signer in signer_infos.
        :param datau: Canonicalized signed content.
        :return: False if the digest or signature does not match.
        :raise SignatureVerificationError: when no definite answer can be given.
        """
        return verifier.verify_signer(self.signed_data, index, datau)


def decode(datas: bytes) -> SignedDataEnvelope:
    """
    Decode a CMS ContentInfo holding SignedData.

    :param datas: DER/BER encoded signature bytes.
    :return: SignedDataEnvelope
    :raise MalformedSignatureError: on any decoding or structural error.
    """
    if not datas:
        raise MalformedSignatureError('empty signature')
    try:
        content_info = cms.ContentInfo.load(datas, strict=True)
        content_type = content_info['content_type'].native
        if content_type != 'signed_data':
            raise MalformedSignatureError('content type is %s, not signed_data' % content_type)
        signed_data = content_info['content']
        # asn1crypto parses lazily, force the whole structure now
        signed_data.native
        envelope = SignedDataEnvelope(signed_data)
    except (ValueError, TypeError, KeyError, IndexError, OverflowError) as ex:
        if isinstance(ex, MalformedSignatureError):
            raise
        raise MalformedSignatureError('could not parse signature: %s' % ex) from ex
    if not envelope.certificates:
        raise MalformedSignatureError('signature carries no certificates')
    return envelope
