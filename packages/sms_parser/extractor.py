"""
SMS Field Extractor - pulls UPI debit details out of bank SMS bodies.

Every field is matched independently against the raw body, so a miss on
one field never hides the others. Values are kept as the matched text;
numeric parsing happens downstream (see amounts.py).

Tie-break rules:
    FIRST_MATCH_WINS     each field takes the first match in the body
    COMPLETE_OR_NOTHING  amount, date and vpa are all required for a
                         transaction fragment
    REFERENCE_SENTINEL   a missing reference becomes "N/A"
    BALANCE_INDEPENDENT  the balance is reported whether or not the same
                         body produced a transaction
"""

import re
from dataclasses import dataclass
from typing import Dict, Optional

import structlog

logger = structlog.get_logger()

REFERENCE_SENTINEL = "N/A"
REQUIRED_FIELDS = ("amount", "date", "vpa")

_FLAGS = re.IGNORECASE | re.ASCII
_WS = r"[\s\u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"


@dataclass(frozen=True)
class Transaction:
    """A complete debit extracted from one message."""

    amount: str
    date: str
    vpa: str
    reference: str = REFERENCE_SENTINEL

    def to_dict(self) -> Dict[str, str]:
        return {
            "amount": self.amount,
            "date": self.date,
            "vpa": self.vpa,
            "reference": self.reference,
        }


@dataclass(frozen=True)
class MessageFragment:
    """Everything one message body yielded."""

    fields: Dict[str, Optional[str]]
    transaction: Optional[Transaction] = None
    balance: Optional[str] = None

    @property
    def missing_fields(self) -> list:
        return [name for name in REQUIRED_FIELDS if not self.fields.get(name)]


class FieldExtractor:
    """Extracts the fixed UPI debit field set from a message body."""

    # Matching is ASCII-only apart from whitespace, which also covers the
    # Unicode space separators.
    PATTERNS = {
        "amount": re.compile(rf"debited for Rs\.?{_WS}?([\d.,]+)", _FLAGS),
        "date": re.compile(
            rf"on{_WS}(\d{{2}}-\d{{2}}-\d{{4}} \d{{2}}:\d{{2}}:\d{{2}})", _FLAGS
        ),
        "vpa": re.compile(rf"credited to vpa{_WS}([\w@.]+)", _FLAGS),
        "reference": re.compile(rf"UPI Ref no{_WS}?(\d{{9,}})", _FLAGS),
        "balance": re.compile(rf"Current Balance is INR{_WS}?([\d.,]+)", _FLAGS),
    }

    def match_fields(self, body: str) -> Dict[str, Optional[str]]:
        """Run every pattern once; unmatched fields map to None."""
        fields = {}
        for name, pattern in self.PATTERNS.items():
            match = pattern.search(body)
            fields[name] = match.group(1) if match else None
        return fields

    def extract(self, body: Optional[str]) -> MessageFragment:
        body = body or ""
        fields = self.match_fields(body)

        transaction = None
        if all(fields[name] for name in REQUIRED_FIELDS):
            transaction = Transaction(
                amount=fields["amount"],
                date=fields["date"],
                vpa=fields["vpa"],
                reference=fields["reference"] or REFERENCE_SENTINEL,
            )

        fragment = MessageFragment(
            fields=fields, transaction=transaction, balance=fields["balance"]
        )
        if transaction is None:
            logger.debug("sms_fields_missing", missing=fragment.missing_fields)
        return fragment


_default_extractor = FieldExtractor()


def extract_fields(body: Optional[str]) -> MessageFragment:
    """Extract fragments from a single message body."""
    return _default_extractor.extract(body)
