# *-* coding: utf-8 *-*
import logging
import datetime

from smimeverdict import constants, mime, ocsp, signeddata, verifier, certificates, identity
from smimeverdict.errors import MalformedSignatureError, SignatureVerificationError
from smimeverdict.result import VerificationResult
from smimeverdict.email.structure import envelope_problems

logger = logging.getLogger(__name__)


class SmimeVerifier(object):
    """
    Classifies S/MIME signed messages into verification verdicts.

    :param margin_hours: Clock skew allowance for certificate validity windows.
    :param clock: Callable returning the current aware datetime.
    :param ocsp_diagnostics: Build an OCSP request for the signer certificate and log it.
        The request is diagnostic only and never changes the verdict.
    """

    def __init__(self, margin_hours=constants.EXPIRATION_MARGIN_HOURS, clock=None, ocsp_diagnostics=False):
        self.margin = datetime.timedelta(hours=margin_hours)
        self.clock = clock or certificates.utcnow
        self.ocsp_diagnostics = ocsp_diagnostics

    async def verify(self, raw_message, mail_id) -> VerificationResult:
        """
        Verify a raw message as a signed S/MIME message.

        Anticipated failures are returned as results.  Anything raised from
        here is unexpected and the caller must not persist a result for it.

        :param raw_message: Full MIME message, preferably bytes.
        :param mail_id: Opaque identifier copied to the result.
        :return: VerificationResult
        """
        message = mime.parse(raw_message)

        problems = envelope_problems(message)
        if problems:
            logger.debug(f'{mail_id}: not an S/MIME envelope: {"; ".join(problems)}')
            return VerificationResult.cannot_verify(mail_id, constants.MESSAGE_NOT_SIGNED)

        signature_node = message.get_node(constants.SIGNATURE_NODE)
        try:
            envelope = signeddata.decode(signature_node.content)
        except MalformedSignatureError as ex:
            logger.debug(f'{mail_id}: {ex}')
            return VerificationResult.fraud_warning(mail_id, constants.MESSAGE_INVALID_SIGNATURE)
        signer = identity.signer_email(envelope.certificates[0])

        if self.ocsp_diagnostics:
            self.log_ocsp_request(mail_id, envelope)

        if not certificates.are_certificates_current(envelope.certificates, self.clock(), self.margin):
            return VerificationResult.fraud_warning(mail_id, constants.MESSAGE_CERTIFICATE_EXPIRED, signer)

        signed = message.get_node(constants.SIGNED_CONTENT_NODE)
        try:
            verified = await verifier.verify_signature(envelope, signed.raw, constants.SIGNER_INDEX)
        except SignatureVerificationError as ex:
            logger.debug(f'{mail_id}: {ex}')
            return VerificationResult.cannot_verify(mail_id, constants.MESSAGE_UNKNOWN_ERROR)
        if not verified:
            return VerificationResult.fraud_warning(mail_id, constants.MESSAGE_VERIFICATION_FAILED, signer)

        from_address = message.from_address
        if from_address is None:
            logger.debug(f'{mail_id}: no From address to compare with {signer}')
            return VerificationResult.cannot_verify(mail_id, constants.MESSAGE_UNKNOWN_ERROR, signer)
        if not identity.addresses_match(signer, from_address):
            logger.debug(f'{mail_id}: signer {signer!r} != from {from_address!r}')
            return VerificationResult.fraud_warning(mail_id, constants.MESSAGE_FROM_MISMATCH, signer)

        return VerificationResult.verified(mail_id, signer)

    def log_ocsp_request(self, mail_id, envelope):
        try:
            cert = envelope.signer_certificate(constants.SIGNER_INDEX)
        except SignatureVerificationError as ex:
            logger.debug(f'{mail_id}: no OCSP request, {ex}')
            return
        issuer = ocsp.find_issuer(cert, envelope.certificates)
        try:
            url = ocsp.ocsp_url(cert)
            if url is None or issuer is None:
                logger.debug(f'{mail_id}: no OCSP request, url={url} issuer found={issuer is not None}')
                return
            request = ocsp.build_request(cert, issuer)
        except (ValueError, TypeError) as ex:
            logger.exception(ex)
            return
        logger.debug(f'{mail_id}: OCSP request for {url}: {request.hex()}')


async def verify(raw_message, mail_id, margin_hours=constants.EXPIRATION_MARGIN_HOURS, clock=None, ocsp_diagnostics=False) -> VerificationResult:
    """
    Verify S/MIME signed email.

    :param raw_message: Email data, preferably bytes.
    :param mail_id: Opaque identifier passed through to the result.
    :param margin_hours: Clock skew allowance for certificate validity.
    :param clock: Callable returning the current aware datetime.
    :param ocsp_diagnostics: Log an OCSP request for the signer certificate.
    :return: VerificationResult
    """
    cls = SmimeVerifier(margin_hours, clock, ocsp_diagnostics)
    return await cls.verify(raw_message, mail_id)
