import base64
import binascii
from dataclasses import dataclass


@dataclass(frozen=True)
class BasicCredentials:
    username: str
    password: str
    encoding: str = "utf-8"

    @classmethod
    def from_authorization_header(cls, authorization_header: str | None):
        """
        Extract basic credentials from an authorization header
        :param authorization_header: the authorization 'Basic dXNlcjpwYXNz' string
        :return: the decoded credentials or None
        """
        if not authorization_header:
            return None
        schema, _, value = authorization_header.partition(" ")
        if schema.lower() != "basic" or not value:
            return None
        try:
            raw = base64.b64decode(value.strip(), validate=True)
        except binascii.Error:
            return None
        encoding = "utf-8"
        try:
            decoded = raw.decode(encoding)
        except UnicodeDecodeError:
            encoding = "latin-1"
            decoded = raw.decode(encoding)
        username, separator, password = decoded.partition(":")
        if not separator:
            return None
        return cls(username=username, password=password, encoding=encoding)

    def __repr__(self) -> str:
        return f"BasicCredentials(username={self.username!r}, password='***')"
