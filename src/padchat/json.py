''' JSON handling for padchat frames. The fastest library available is
    selected at import time: msgspec, then orjson, then the standard
    library. Whichever is in use, :func:`dumps` returns bytes and
    :func:`loads` accepts either bytes or text; :data:`DecodeError` and
    :data:`EncodeError` are the exception classes the selected library
    raises for malformed input and unserializable values, respectively.
    :data:`backend` names the library in use.
'''


def _msgspec():
    import msgspec

    encoder = msgspec.json.Encoder()
    decoder = msgspec.json.Decoder()

    decode_error = (msgspec.DecodeError, UnicodeDecodeError)
    encode_error = (msgspec.EncodeError, TypeError, OverflowError)
    return 'msgspec', encoder.encode, decoder.decode, decode_error, encode_error


def _orjson():
    import orjson

    decode_error = (orjson.JSONDecodeError, UnicodeDecodeError)
    encode_error = (orjson.JSONEncodeError, TypeError)
    return 'orjson', orjson.dumps, orjson.loads, decode_error, encode_error


def _stdlib():
    import json

    # The server reads compact UTF-8; match the output of the other two.

    def dumps(thing):
        return json.dumps(thing, ensure_ascii=False, separators=(',', ':')).encode('utf-8')

    decode_error = (json.JSONDecodeError, UnicodeDecodeError)
    encode_error = (TypeError, ValueError)
    return 'json', dumps, json.loads, decode_error, encode_error


for _select in (_msgspec, _orjson, _stdlib):
    try:
        backend, dumps, loads, DecodeError, EncodeError = _select()
    except ImportError:
        continue
    else:
        break

del _select


def dumps_text(thing):
    """ Return the JSON encoding of *thing* as a str, suitable for a
        WebSocket text frame.
    """

    return dumps(thing).decode('utf-8')


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
