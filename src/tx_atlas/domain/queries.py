from dataclasses import dataclass


@dataclass(frozen=True)
class AddressQuery:
    address: str
    token: str | None = None


@dataclass(frozen=True)
class AccountQuery:
    account: str
    token: str | None = None


@dataclass(frozen=True)
class XpubQuery:
    xpub: str


QueryIdentifier = AddressQuery | AccountQuery | XpubQuery
