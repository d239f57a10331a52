#! /usr/bin/env python3

""" A minimal kernel that answers kernel_info and execute requests on its
    shell channel without running anything: every execute request simply
    bumps the execution count. The connection file is named on the command
    line, or via the KCHANNEL_CONNECTION_FILE environment variable.
"""

import argparse
import asyncio
import logging

import kchannel
from kchannel.protocol import shell


def parse_command_line():

    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('connection_file', nargs='?', default=None)
    parser.add_argument('--debug', action='store_true', help='log every message')

    return parser.parse_args()


async def serve(info):

    channel = kchannel.Channel.from_connection(info, 'shell', shell.requests, shell.replies)
    count = 0

    try:
        while True:
            try:
                request = await channel.recv()
            except kchannel.MessageError as e:
                logging.warning('discarding request: %s', e)
                continue

            content = request.content

            if isinstance(content, shell.KernelInfoRequest):
                reply = shell.KernelInfoReply(
                    protocol_version=kchannel.protocol.fields.PROTOCOL_VERSION,
                    implementation='echo',
                    implementation_version='0.1',
                    language_info={'name': 'text', 'file_extension': '.txt'},
                    banner='echo kernel')
            elif isinstance(content, shell.ExecuteRequest):
                count += 1
                reply = shell.ExecuteReply(execution_count=count)
            elif isinstance(content, shell.ShutdownRequest):
                await channel.send_next(request, shell.ShutdownReply(restart=content.restart))
                break
            else:
                logging.info('ignoring %s', request.header.msg_type)
                continue

            await channel.send_next(request, reply)
    finally:
        channel.close()


def main():

    arguments = parse_command_line()

    level = logging.DEBUG if arguments.debug else logging.INFO
    logging.basicConfig(level=level, format='%(asctime)s %(name)s %(levelname)s %(message)s')

    info = kchannel.config.load(arguments.connection_file)
    asyncio.run(serve(info))


if __name__ == '__main__':
    main()


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
