''' Wrapper module providing the equivalent of :func:`json.loads` and
    :func:`json.dumps` for wire frames. Both operate on bytes: the encoder
    returns bytes, and the decoder accepts bytes or str.
'''

import msgspec


# The module-level functions are used rather than a shared Encoder/Decoder
# pair; frames are encoded and decoded from many threads at once.

dumps = msgspec.json.encode
loads = msgspec.json.decode

DecodeError = msgspec.DecodeError
EncodeError = msgspec.EncodeError

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
