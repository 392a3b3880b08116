"""Job and invoice numbers as printed on paperwork."""

import random
from datetime import date
from typing import Optional


def generate_job_number(on: Optional[date] = None, rng=None) -> str:
    """MV{yy}{mm}{dd}-{nnn}, e.g. MV250714-042."""
    on = on or date.today()
    rng = rng or random
    return f"MV{on:%y%m%d}-{rng.randrange(1000):03d}"


def generate_invoice_number(on: Optional[date] = None, rng=None) -> str:
    """INV-{yyyy}{mm}-{nnnn}, e.g. INV-202507-0815."""
    on = on or date.today()
    rng = rng or random
    return f"INV-{on:%Y%m}-{rng.randrange(10000):04d}"
