"""
Encoders turning a span field set into a writable record.
"""

import json
from typing import Any, Dict


class JsonEncoder:
    """
    Encode each field set as one compact JSON object per line.

    Values JSON cannot represent natively are rendered with ``str`` so
    arbitrary log fields survive encoding.
    """

    def __init__(self, sort_keys: bool = False):
        self.sort_keys = sort_keys

    def encode(self, fields: Dict[str, Any]) -> str:
        return (
            json.dumps(
                fields,
                default=str,
                separators=(",", ":"),
                sort_keys=self.sort_keys,
            )
            + "\n"
        )
