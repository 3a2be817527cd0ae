# *-* coding: utf-8 *-*
import logging
import datetime

from asn1crypto import x509

from smimeverdict import constants

logger = logging.getLogger(__name__)


def utcnow() -> datetime.datetime:
    return datetime.datetime.now(tz=datetime.timezone.utc)


def validity(cert: x509.Certificate) -> tuple:
    period = cert['tbs_certificate']['validity']
    return period['not_before'].native, period['not_after'].native


def validity_problems(certs: list, now: datetime.datetime = None, margin: datetime.timedelta = None) -> list:
    """
    Find certificates that are outside of their validity window.

    Expired or not yet valid certificates cannot be checked for revocation,
    so a single one of them taints the whole signature.

    :param certs: asn1crypto certificates.
    :param now: Aware datetime to check against, the current time if None.
    :param margin: Allowance added to both ends of every window.
    :return: List of problem descriptions, empty if all certificates are current.
    """
    if now is None:
        now = utcnow()
    if margin is None:
        margin = datetime.timedelta(hours=constants.EXPIRATION_MARGIN_HOURS)
    problems = []
    for cert in certs:
        not_before, not_after = validity(cert)
        # notAfter may be 9999-12-31, so the margin is applied to now
        if now + margin < not_before:
            problems.append('%s is not valid before %s' % (cert.subject.human_friendly, not_before))
        elif now - margin > not_after:
            problems.append('%s expired on %s' % (cert.subject.human_friendly, not_after))
    for problem in problems:
        logger.debug(problem)
    return problems


def are_certificates_current(certs: list, now: datetime.datetime = None, margin: datetime.timedelta = None) -> bool:
    return not validity_problems(certs, now, margin)
