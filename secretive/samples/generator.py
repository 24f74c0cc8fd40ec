"""
Sample record generator for exercising scrub/restore round trips.

Generates deterministic nested customer records covering every shape the
traversal engine handles: promoted dataclass fields, named tuples,
nested dataclasses, optional fields left as None, empty and populated
lists, dicts and non-string scalars.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, timedelta
from typing import Any, Dict, List, NamedTuple, Optional

import numpy as np
from faker import Faker


# =============================================================================
# RECORD SHAPES
# =============================================================================

CURRENCIES = ["USD", "EUR", "GBP", "JPY"]

ORDER_STATUSES = {
    "open": 0.45,
    "shipped": 0.35,
    "invoiced": 0.15,
    "cancelled": 0.05,
}


class Contact(NamedTuple):
    """Contact channel for a customer."""
    kind: str  # email, phone
    value: str


@dataclass
class Address:
    """Postal address."""
    street: str
    city: str
    postcode: str
    country: str


@dataclass
class Party:
    """Fields shared by every business partner."""
    name: str
    email: str


@dataclass
class LineItem:
    """Order line item."""
    sku: str
    description: str
    quantity: int
    unit_price: float


@dataclass
class Order:
    """Sales order header with line items."""
    order_number: str
    order_date: str
    currency: str
    status: str
    items: List[LineItem] = field(default_factory=list)
    notes: Optional[str] = None


@dataclass
class Customer(Party):
    """Customer master record; name and email come from Party."""
    customer_id: str = ""
    company: str = ""
    address: Optional[Address] = None
    contacts: List[Contact] = field(default_factory=list)
    orders: List[Order] = field(default_factory=list)
    tags: Optional[List[str]] = None
    attributes: Dict[str, Any] = field(default_factory=dict)


# =============================================================================
# GENERATOR
# =============================================================================

class SampleGenerator:
    """
    Deterministic generator for nested customer records.

    Same seed = same records.
    """

    def __init__(self, seed: int = 42, start_date: str = "2024-01-01"):
        self.seed = seed
        self.start_date = date.fromisoformat(start_date)

        # Initialize random generators with seed for reproducibility
        self.rng = np.random.default_rng(seed)
        self.faker = Faker()
        Faker.seed(seed)

        self.order_counter = 0

    def _weighted_choice(self, options: Dict[str, float]) -> str:
        """Select from weighted options."""
        choices = list(options.keys())
        weights = list(options.values())
        return str(self.rng.choice(choices, p=np.array(weights) / sum(weights)))

    def _random_date(self) -> str:
        return (self.start_date + timedelta(days=int(self.rng.integers(0, 365)))).isoformat()

    def generate_address(self) -> Address:
        return Address(
            street=self.faker.street_address(),
            city=self.faker.city(),
            postcode=self.faker.postcode(),
            country=self.faker.country_code(),
        )

    def generate_order(self) -> Order:
        """Generate an order with 0-4 line items."""
        self.order_counter += 1
        items = [
            LineItem(
                sku=f"MAT{int(self.rng.integers(1, 1000)):03d}",
                description=f"{self.faker.word().title()} {self.faker.word().title()}",
                quantity=int(self.rng.integers(1, 50)),
                unit_price=round(float(self.rng.uniform(1.0, 500.0)), 2),
            )
            for _ in range(int(self.rng.integers(0, 5)))
        ]
        # Roughly a third of orders carry a free-text note
        notes = self.faker.sentence() if self.rng.random() < 0.3 else None
        return Order(
            order_number=f"SO{self.order_counter:06d}",
            order_date=self._random_date(),
            currency=str(self.rng.choice(CURRENCIES)),
            status=self._weighted_choice(ORDER_STATUSES),
            items=items,
            notes=notes,
        )

    def generate_customer(self, index: int) -> Customer:
        """Generate a single customer record."""
        contacts = [Contact(kind="email", value=self.faker.email())]
        if self.rng.random() < 0.5:
            contacts.append(Contact(kind="phone", value=self.faker.phone_number()))

        # Mix uninitialized (None) and initialized-empty tag lists
        tag_roll = self.rng.random()
        if tag_roll < 0.3:
            tags = None
        elif tag_roll < 0.5:
            tags = []
        else:
            tags = [self.faker.word() for _ in range(int(self.rng.integers(1, 4)))]

        return Customer(
            name=self.faker.name(),
            email=self.faker.company_email(),
            customer_id=f"CUST{index + 1:04d}",
            company=self.faker.company(),
            address=self.generate_address() if self.rng.random() < 0.8 else None,
            contacts=contacts,
            orders=[self.generate_order() for _ in range(int(self.rng.integers(0, 4)))],
            tags=tags,
            attributes={
                "segment": str(self.rng.choice(["retail", "wholesale", "public"])),
                "credit_limit": int(self.rng.integers(1, 100)) * 1000,
                "vip": bool(self.rng.random() < 0.1),
                "api_key": self.faker.sha1(),
                "referrer": None,
            },
        )

    def generate(self, count: int = 10) -> List[Customer]:
        """Generate count customer records."""
        return [self.generate_customer(i) for i in range(count)]

    def generate_json(self, count: int = 10) -> List[Dict[str, Any]]:
        """Generate customer records as JSON-compatible dicts."""
        return [_to_json(asdict(customer)) for customer in self.generate(count)]


def _to_json(obj: Any) -> Any:
    """Turn tuples left by asdict() into lists."""
    if isinstance(obj, dict):
        return {k: _to_json(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_to_json(item) for item in obj]
    return obj
