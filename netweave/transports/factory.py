from typing import Literal

from .http import HTTPTransport


def make_transport(name: Literal["http"], **kwargs):
    match name:
        case "http":
            return HTTPTransport(**kwargs)
        case _:
            raise NotImplementedError(f"Transport {name!r} is not implemented yet")
