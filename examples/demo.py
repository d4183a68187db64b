# MyParcel SDK Example Usage

import json
import os

from myparcel_sdk import (
    MyParcelRequest,
    Operation,
    RequestType,
    ApiError,
    TransportError,
    ConfigError,
    configure_logging,
)


def main():
    """Demonstrate MyParcelRequest usage with examples."""

    print("=== MyParcel SDK Demo ===\n")

    configure_logging(log_level="DEBUG", log_file="myparcel.log")
    api_key = os.environ.get("MYPARCEL_API_KEY", "")

    # Example 1: Create a shipment
    print("1. Create a shipment:")
    payload = {
        "data": {
            "shipments": [
                {
                    "reference_identifier": "order-1001",
                    "recipient": {
                        "cc": "NL",
                        "city": "Hoofddorp",
                        "street": "Antareslaan",
                        "number": "31",
                        "postal_code": "2132JE",
                        "person": "Jan Jansen",
                    },
                    "options": {"package_type": 1},
                    "carrier": 1,
                }
            ]
        }
    }

    shipment_ids = []
    try:
        request = (
            MyParcelRequest()
            .configure(api_key, json.dumps(payload), Operation.SHIPMENT)
            .send("POST", RequestType.SHIPMENTS)
        )
        shipment_ids = request.get_result("data.ids", "id")
        print(f"   Created shipments: {shipment_ids}")
    except ConfigError as e:
        print(f"   Set MYPARCEL_API_KEY first: {e}")
        return
    except ApiError as e:
        print(f"   MyParcel refused the shipment: {e.error}")
    except TransportError as e:
        print(f"   Could not reach MyParcel: {e.error}")

    print()

    # Example 2: Download the labels as one PDF
    print("2. Download labels:")
    if not shipment_ids:
        print("   No shipments to print")
        return

    try:
        request = (
            MyParcelRequest()
            .configure(api_key, ";".join(str(i) for i in shipment_ids), Operation.RETRIEVE_LABEL_PDF)
            .send("GET", RequestType.RETRIEVE_LABEL)
        )
        with open("labels.pdf", "wb") as f:
            f.write(request.get_result())
        print("   Labels written to labels.pdf")
    except (ApiError, TransportError) as e:
        print(f"   Error: {e}")


if __name__ == "__main__":
    main()
