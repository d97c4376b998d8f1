"""Shared field types for value models."""

from decimal import Decimal
from typing import Annotated

from pydantic import AfterValidator

from taxengine.money import round_to_cents

# Dollar amount normalized to whole cents on construction.
Money = Annotated[Decimal, AfterValidator(round_to_cents)]
