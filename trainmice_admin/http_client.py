import ssl
from functools import lru_cache

import certifi
from aiohttp import ClientSession, DummyCookieJar, TCPConnector


@lru_cache()
def get_ssl_context() -> ssl.SSLContext:
    return ssl.create_default_context(cafile=certifi.where())


def create_client_session() -> ClientSession:
    return ClientSession(
        connector=TCPConnector(ssl=get_ssl_context()),
        cookie_jar=DummyCookieJar(),  # bearer token only, ignore cookies
    )
