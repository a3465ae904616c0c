"""Synthetic Pakistani customer identities for automated orders."""

import random
from dataclasses import dataclass

FIRST_NAMES = [
    'Muhammad', 'Ahmed', 'Ali', 'Hassan', 'Usman', 'Bilal', 'Hamza', 'Zaid', 'Omar', 'Ibrahim',
    'Fatima', 'Ayesha', 'Zainab', 'Maryam', 'Khadija', 'Sara', 'Hira', 'Sana', 'Noor', 'Amna',
]

LAST_NAMES = [
    'Khan', 'Ahmed', 'Ali', 'Malik', 'Sheikh', 'Hussain', 'Raza', 'Siddiqui', 'Qureshi', 'Butt',
    'Chaudhry', 'Awan', 'Iqbal', 'Mirza', 'Javed', 'Rashid', 'Nawaz', 'Akram', 'Saeed', 'Tariq',
]

CITIES = [
    'Karachi', 'Lahore', 'Islamabad', 'Rawalpindi', 'Faisalabad', 'Multan', 'Peshawar', 'Quetta',
    'Sialkot', 'Gujranwala', 'Hyderabad', 'Bahawalpur', 'Sargodha', 'Sukkur', 'Abbottabad',
]

AREAS = [
    'Gulshan', 'DHA Phase', 'Johar Town', 'Model Town', 'Bahria Town', 'Clifton', 'Saddar',
    'Garden Town', 'F-10', 'G-11', 'I-8', 'Blue Area', 'Cantt', 'University Road', 'Mall Road',
]

# Mobile network codes; the phone number keeps the last two digits after "03".
MOBILE_PREFIXES = [
    '300', '301', '302', '303', '304', '305', '306',
    '311', '312', '313', '321', '322', '323', '332', '333',
]


@dataclass(frozen=True)
class CustomerIdentity:
    name: str
    phone_number: str
    city: str
    address: str


def random_name(rng: random.Random) -> str:
    return f"{rng.choice(FIRST_NAMES)} {rng.choice(LAST_NAMES)}"


def random_phone_number(rng: random.Random) -> str:
    prefix = rng.choice(MOBILE_PREFIXES)
    return f"03{prefix[-2:]}-{rng.randint(0, 9_999_999):07d}"


def random_address(rng: random.Random, city: str) -> str:
    house = rng.randint(1, 500)
    street = rng.randint(1, 50)
    return f"House {house}, Street {street}, {rng.choice(AREAS)}, {city}"


def random_identity(rng: random.Random | None = None) -> CustomerIdentity:
    rng = rng or random.Random()
    city = rng.choice(CITIES)
    return CustomerIdentity(
        name=random_name(rng),
        phone_number=random_phone_number(rng),
        city=city,
        address=random_address(rng, city),
    )
