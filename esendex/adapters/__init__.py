"""
Esendex Adapters Layer.

Infrastructure implementations of the domain interfaces:
- HttpClient: requests-based transport with HTTP Basic Auth
- RestClient: resource-level GET on top of the transport
- XmlSerialiser: Esendex XML dialect
"""

from esendex.adapters.http_client import HttpClient
from esendex.adapters.rest_client import RestClient
from esendex.adapters.xml_serialiser import XmlSerialiser

__all__ = [
    "HttpClient",
    "RestClient",
    "XmlSerialiser",
]
