# *-* coding: utf-8 *-*
import enum

import attr

from smimeverdict import constants


class ResultCode(enum.Enum):
    VERIFICATION_OK = 'VERIFICATION_OK'
    CANNOT_VERIFY = 'CANNOT_VERIFY'
    FRAUD_WARNING = 'FRAUD_WARNING'


def _success_matches_code(instance, attribute, value):
    if value and instance.code is not ResultCode.VERIFICATION_OK:
        raise ValueError('only VERIFICATION_OK results can be successful')


@attr.s(frozen=True, slots=True)
class VerificationResult(object):
    """
    Outcome of verifying one message.

    :param mail_id: Caller supplied identifier, passed through unchanged.
    :param code: One of the three ResultCode verdicts.
    :param message: Plain language explanation meant for the end user.
    :param signer: Email address taken from the signing certificate, or ''.
    :param success: True only for a verified signature matching the sender.
    """
    mail_id = attr.ib()
    code = attr.ib(validator=attr.validators.instance_of(ResultCode))
    message = attr.ib(validator=attr.validators.instance_of(str))
    signer = attr.ib(default='', converter=lambda v: v or '')
    success = attr.ib(default=False, validator=_success_matches_code)

    @classmethod
    def verified(cls, mail_id, signer: str) -> 'VerificationResult':
        return cls(mail_id, ResultCode.VERIFICATION_OK, constants.MESSAGE_VERIFIED, signer, True)

    @classmethod
    def cannot_verify(cls, mail_id, message: str, signer: str = '') -> 'VerificationResult':
        return cls(mail_id, ResultCode.CANNOT_VERIFY, message, signer)

    @classmethod
    def fraud_warning(cls, mail_id, message: str, signer: str = '') -> 'VerificationResult':
        return cls(mail_id, ResultCode.FRAUD_WARNING, message, signer)

    def as_dict(self) -> dict:
        data = attr.asdict(self)
        data['code'] = self.code.value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> 'VerificationResult':
        return cls(
            data['mail_id'],
            ResultCode(data['code']),
            data['message'],
            data.get('signer', ''),
            data.get('success', False),
        )
