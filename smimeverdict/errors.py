# *-* coding: utf-8 *-*


class SmimeError(ValueError):
    """Base class of the anticipated verification failures."""


class MalformedSignatureError(SmimeError):
    """The signature part is not a decodable CMS SignedData structure."""


class SignatureVerificationError(SmimeError):
    """The signature could not be evaluated to a definite true or false."""
