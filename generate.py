import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from generate_random import generate_random, variant_weights, weight

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")


@variant_weights(Admin=0, Guest=2)
class Role(Enum):
    Admin = "admin"
    User = "user"
    Guest = "guest"


@dataclass
class Circle:
    radius: float


@weight(3)
@dataclass
class Rect:
    width: int
    height: int


@dataclass
class Account:
    name: str
    role: Role
    tags: set[str]
    shapes: list[Union[Circle, Rect]]
    manager: Optional[str]
    limits: dict[str, tuple[int, bool]]


seed = random.randint(0, 2**32 - 1)
rng = random.Random(seed)
account = generate_random(Account, rng)

logging.info(f"seed={seed}")
print(account)
