#!/usr/bin/env vpython3
# *-* coding: utf-8 *-*
import sys
import asyncio
import logging
from smimeverdict import email


async def main(fnames):
    for fname in fnames:
        print('*' * 20, fname)
        try:
            datae = open(fname, 'rb').read()
        except OSError:
            print('no such file')
            continue
        result = await email.verify(datae, fname, ocsp_diagnostics=True)
        print('code:', result.code.value)
        print('signer:', result.signer)
        print('message:', result.message)


if __name__ == '__main__':
    args = sys.argv[1:]
    if args[:1] == ['-v']:
        logging.basicConfig(level=logging.DEBUG)
        args = args[1:]
    asyncio.run(main(args or ['smime-signed.eml']))
