# *-* coding: utf-8 *-*
ROOT_NODE_CONTENT_TYPE = 'multipart/signed'
ROOT_NODE_PROTOCOL = 'application/pkcs7-signature'
MESSAGE_INTEGRITY_CHECK_ALGORITHMS = frozenset((
    'md5', 'sha-1', 'sha-224', 'sha-256', 'sha-384', 'sha-512', 'unknown',
))
SIGNATURE_NODE_CONTENT_TYPES = frozenset((
    'application/x-pkcs7-signature',
    'application/pkcs7-signature',
))

# S/MIME signature must be in content node 2, email content in content node 1.
SIGNED_CONTENT_NODE = '1'
SIGNATURE_NODE = '2'

SIGNER_INDEX = 0

# clock skew allowance applied to both ends of a certificate validity window
EXPIRATION_MARGIN_HOURS = 2

MESSAGE_NOT_SIGNED = 'Message is not digitally signed.'
MESSAGE_INVALID_SIGNATURE = 'Fraud warning: Invalid digital signature.'
MESSAGE_CERTIFICATE_EXPIRED = (
    "Fraud warning: The signature's certificate has expired or is not valid yet. "
    "Be wary of message content."
)
MESSAGE_VERIFICATION_FAILED = 'Fraud warning: Message failed verification with signature.'
MESSAGE_FROM_MISMATCH = (
    'Fraud warning: The "From" email address does not match '
    "the signature's email address."
)
MESSAGE_UNKNOWN_ERROR = 'Message cannot be verified: Unknown error.'
MESSAGE_VERIFIED = 'Message includes a valid digital signature for the sender.'
