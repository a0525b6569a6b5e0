import enum


class Role(str, enum.Enum):
    ADMIN = "admin"
    USER = "user"
    COMPANION = "companion"


class Gender(str, enum.Enum):
    MALE = "male"
    FEMALE = "female"
    OTHERS = "others"


class MaritalStatus(str, enum.Enum):
    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"
    OTHER = "other"


class RelationshipType(str, enum.Enum):
    FRIEND = "friend"
    FAMILY = "family"
    SPOUSE = "spouse"
    COLLEAGUE = "colleague"
    OTHER = "other"


class BookingStatus(str, enum.Enum):
    PENDING = "pending"
    PAID = "paid"
    CANCELLED = "cancelled"


class Currency(str, enum.Enum):
    NAIRA = "naira"
    USD = "usd"
