"""Card record value type and numeric field parsing"""

from dataclasses import dataclass, fields


@dataclass(frozen=True)
class Record:
    """
    One credit card as read from the corpus.
    
    All fields are kept as text; annual_fee and purchase_rate are parsed
    on demand with parse_fee() / parse_rate_percent().
    """
    title: str = ""
    image_ref: str = ""
    annual_fee: str = ""       # Currency formatted, e.g. "$120"
    purchase_rate: str = ""    # Fraction, e.g. "0.1999"
    cash_rate: str = ""
    value_prop: str = ""
    benefits: str = ""
    bank_name: str = ""
    link: str = ""

    def searchable_text(self) -> str:
        """Title, value proposition, benefits and bank name joined by spaces"""
        return f"{self.title} {self.value_prop} {self.benefits} {self.bank_name}"


RECORD_FIELDS = tuple(f.name for f in fields(Record))


def parse_fee(text: str) -> float:
    """
    Parse a currency formatted fee.
    
    Examples:
        >>> parse_fee("$1,200")
        1200.0
        >>> parse_fee(" 0.0 ")
        0.0
    
    Raises:
        ValueError: If the text is not a number once "$" and "," are removed
    """
    return float(text.replace("$", "").replace(",", "").strip())


def parse_rate_percent(text: str) -> float:
    """
    Parse a fractional interest rate and scale it to percent.
    
    Example:
        >>> round(parse_rate_percent("0.1999"), 2)
        19.99
    
    Raises:
        ValueError: If the text is not a number
    """
    return float(text) * 100


# Field names used on the wire and in JSON corpora
WIRE_NAMES = {
    "title": "cardTitle",
    "image_ref": "cardImages",
    "annual_fee": "annualFees",
    "purchase_rate": "purchaseInterestRate",
    "cash_rate": "cashInterestRate",
    "value_prop": "productValueProp",
    "benefits": "productBenefits",
    "bank_name": "bankName",
    "link": "cardLink",
}
