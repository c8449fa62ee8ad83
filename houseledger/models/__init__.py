"""
SQLAlchemy ORM models package.

All models are imported here so that:
  1. Base.metadata knows every table before create_all() runs
  2. String-based relationship targets ("Bank", "Room", ...) resolve
"""

from houseledger.models.user import User  # noqa: F401
from houseledger.models.country import Country  # noqa: F401
from houseledger.models.currency import Currency  # noqa: F401
from houseledger.models.currency_rate import CurrencyConversionRate  # noqa: F401
from houseledger.models.service_user import ServiceUser  # noqa: F401
from houseledger.models.supplier import Supplier  # noqa: F401
from houseledger.models.bank import Bank  # noqa: F401
from houseledger.models.account import Account  # noqa: F401
from houseledger.models.balance import Balance  # noqa: F401
from houseledger.models.transaction import Transaction, TransactionCategory  # noqa: F401
from houseledger.models.salary import Salary  # noqa: F401
from houseledger.models.room import Room  # noqa: F401
from houseledger.models.house_thing import HouseThing  # noqa: F401
