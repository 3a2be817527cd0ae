# *-* coding: utf-8 *-*
from .verify import verify, SmimeVerifier
