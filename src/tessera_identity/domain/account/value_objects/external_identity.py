"""External identity value object."""

from dataclasses import dataclass

from tessera_identity.domain.account.value_objects.email import Email


@dataclass(frozen=True)
class ExternalIdentity:
    """An identity asserted by an OAuth provider after a successful login.

    Only lives for the duration of the callback request; it is used to
    create or fetch the matching local account. ``email_verified`` is set
    only when the provider vouches that the user owns the address.
    """

    first_name: str
    last_name: str
    email: Email
    provider: str
    provider_id: str
    email_verified: bool = False

    def __post_init__(self) -> None:
        if not self.provider or not self.provider_id:
            msg = "External identity requires a provider and a provider id"
            raise ValueError(msg)
