"""
Types shared by the request/response schemas.
"""

from decimal import Decimal
from typing import Annotated

from pydantic import PlainSerializer

# Money stays Decimal inside the service layer and is emitted
# as a JSON number rather than pydantic's default string.
Amount = Annotated[
    Decimal,
    PlainSerializer(float, return_type=float, when_used="json"),
]
