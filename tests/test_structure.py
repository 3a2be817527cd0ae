#!/usr/bin/env vpython3
# coding: utf-8
import unittest

from smimeverdict import mime
from smimeverdict.email import structure

import smime_fixtures

SIGNATURE = b'0\x03\x02\x01\x01'


def message(**kwargs):
    return mime.parse(smime_fixtures.email(smime_fixtures.BODY, SIGNATURE, **kwargs))


class StructureTests(unittest.TestCase):
    def test_signed_envelope(self):
        assert structure.is_signed_envelope(message())
        assert structure.envelope_problems(message()) == []

    def test_legacy_signature_type(self):
        assert structure.is_signed_envelope(message(sigtype=b'application/x-pkcs7-signature'))

    def test_micalg_case_insensitive(self):
        for micalg in (b'SHA-256', b'sha-1', b'"MD5"', b'unknown', b'sha-512'):
            assert structure.is_signed_envelope(message(micalg=micalg)), micalg

    def test_micalg_rejected(self):
        for micalg in (b'sha256', b'sha-3', b'""'):
            assert not structure.is_signed_envelope(message(micalg=micalg)), micalg

    def test_protocol_rejected(self):
        assert not structure.is_signed_envelope(message(protocol=b'"application/x-pkcs7-signature"'))
        assert not structure.is_signed_envelope(message(protocol=b'"application/pgp-signature"'))

    def test_signature_type_rejected(self):
        problems = structure.envelope_problems(message(sigtype=b'application/octet-stream'))
        assert problems == ['signature node content type is application/octet-stream']

    def test_unsigned(self):
        parsed = mime.parse(b'From: alice@example.com\nSubject: hi\n\nplain mail\n')
        problems = structure.envelope_problems(parsed)
        assert not structure.is_signed_envelope(parsed)
        assert 'root content type is text/plain' in problems
        assert 'signature node is missing' in problems

    def test_missing_signature_node(self):
        parsed = mime.parse(
            b'Content-Type: multipart/signed; protocol="application/pkcs7-signature"; micalg=sha-256; boundary=b\n'
            b'\n--b\nContent-Type: text/plain\n\nbody\n--b--\n'
        )
        assert structure.envelope_problems(parsed) == ['signature node is missing']

    def test_no_children(self):
        parsed = mime.parse(
            b'Content-Type: multipart/signed; protocol="application/pkcs7-signature"; micalg=sha-256; boundary=b\n'
            b'\nno parts at all\n'
        )
        assert structure.envelope_problems(parsed) == ['root node has no child nodes', 'signature node is missing']


if __name__ == '__main__':
    unittest.main()
