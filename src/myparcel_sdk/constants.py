"""
Endpoints and header table for the MyParcel API.
"""

from enum import Enum
from typing import Dict

REQUEST_URL = "https://api.myparcel.nl"

SDK_NAME = "MyParcelNL-SDK"

# Seconds
DEFAULT_TIMEOUT = 60

PDF_PREFIX = b"%PDF-1."

CHARSET = "charset=utf-8"


class RequestType(str, Enum):
    """Resource paths under the API base URL."""

    SHIPMENTS = "shipments"
    RETRIEVE_LABEL = "shipment_labels"


class Operation(Enum):
    """Kinds of API calls, each with its own header in ``REQUEST_HEADERS``."""

    SHIPMENT = "shipment"
    RETRIEVE_SHIPMENT = "retrieve_shipment"
    RETRIEVE_LABEL_LINK = "retrieve_label_link"
    RETRIEVE_LABEL_PDF = "retrieve_label_pdf"
    RETURN = "return"
    DELETE = "delete"


# Header prefixes, completed with CHARSET when a request is configured:
# REQUEST_HEADERS[Operation.SHIPMENT] + CHARSET is
# "Content-Type: application/vnd.shipment+json; charset=utf-8".
REQUEST_HEADERS: Dict[Operation, str] = {
    Operation.SHIPMENT: "Content-Type: application/vnd.shipment+json; ",
    Operation.RETRIEVE_SHIPMENT: "Accept: application/json; ",
    Operation.RETRIEVE_LABEL_LINK: "Accept: application/json; ",
    Operation.RETRIEVE_LABEL_PDF: "Accept: application/pdf; ",
    Operation.RETURN: "Content-Type: application/vnd.return_shipment+json; ",
    Operation.DELETE: "Accept: application/json; ",
}
