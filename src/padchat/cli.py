""" Command line access to a padchat server: run one registered operation
    and print its result, or keep the connection open and print every event
    the server emits.
"""

import argparse
import logging
import sys
import threading

from . import config
from . import errors
from . import json
from .client import Client
from .protocol import operations
from .protocol.events import Channel


def arguments(argv=None):

    parser = argparse.ArgumentParser(
        prog='padchat',
        description='Run one operation against a padchat server and print the result.'
    )
    parser.add_argument(
        '--url',
        help='WebSocket URL of the server (default: %s)' % (config.defaults['url']),
        default=None
    )
    parser.add_argument(
        '--timeout',
        help='Seconds to wait for the reply (default: %.0f)' % (config.defaults['send_timeout']),
        type=float,
        default=None
    )
    parser.add_argument(
        '--debug',
        help='Log protocol traffic to stderr',
        action='store_true'
    )
    parser.add_argument(
        '--listen',
        help='Stay connected and print every event until interrupted',
        action='store_true'
    )
    parser.add_argument(
        '--list',
        help='Print the names of every registered operation and exit',
        action='store_true'
    )
    parser.add_argument(
        'operation',
        help='Name of the operation to invoke',
        nargs='?'
    )
    parser.add_argument(
        'parameters',
        help='Operation parameters, either as key=value or positionally',
        nargs='*'
    )

    parsed = parser.parse_args(argv)

    if not parsed.list and not parsed.listen and parsed.operation is None:
        parser.error('an operation is required unless --list or --listen is given')

    return parsed



def parse_value(value):
    """ Interpret a command line value as JSON where possible, so that
        numbers, booleans and lists arrive with their natural types; any
        other text is passed through as a string.
    """

    try:
        return json.loads(value)
    except json.DecodeError:
        return value



def parse_parameters(parameters):
    """ Split the command line *parameters* into positional and keyword
        arguments for :func:`padchat.Client.invoke`.
    """

    args = list()
    kwargs = dict()

    for parameter in parameters:
        key, equals, value = parameter.partition('=')

        if equals and key.isidentifier():
            kwargs[key] = parse_value(value)
        elif kwargs:
            raise ValueError('positional parameter after keyword parameter: ' + repr(parameter))
        else:
            args.append(parse_value(parameter))

    return args, kwargs



def printer(channel, stream):

    def handler(*args):
        printable = list()
        for argument in args:
            if isinstance(argument, Exception):
                argument = str(argument)
            printable.append(argument)

        try:
            text = json.dumps_text(printable)
        except json.EncodeError:
            text = repr(printable)

        stream.write('%s %s\n' % (channel.value, text))
        stream.flush()

    return handler



def main(argv=None, stdout=None, stderr=None):

    if stdout is None:
        stdout = sys.stdout

    if stderr is None:
        stderr = sys.stderr

    parsed = arguments(argv)

    if parsed.list:
        for name in operations.names():
            operation = operations.lookup(name)
            stdout.write(' '.join((name,) + operation.parameters) + '\n')
        return 0

    if parsed.debug:
        logging.basicConfig(level=logging.DEBUG, stream=stderr)

    try:
        settings = config.Settings(url=parsed.url, send_timeout=parsed.timeout)
        args, kwargs = parse_parameters(parsed.parameters)
    except ValueError as e:
        stderr.write('padchat: %s\n' % (e))
        return 2

    client = Client(settings=settings)
    closed = threading.Event()
    client.subscribe(Channel.CLOSE, lambda: closed.set())

    if parsed.listen:
        for channel in Channel:
            if channel is Channel.MESSAGE:
                continue
            client.subscribe(channel, printer(channel, stdout))

    try:
        client.connect()
    except errors.TransportFailure as e:
        stderr.write('padchat: %s\n' % (e))
        client.close()
        return 1

    status = 0

    try:
        if parsed.operation is not None:
            result = client.call(parsed.operation, *args, **kwargs)
            stdout.write(json.dumps_text(result) + '\n')
            stdout.flush()

        if parsed.listen:
            closed.wait()

    except KeyboardInterrupt:
        pass
    except (errors.PadchatError, TypeError, ValueError) as e:
        stderr.write('padchat: %s\n' % (e))
        status = 1
    finally:
        client.close()

    return status



if __name__ == '__main__':
    sys.exit(main())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
