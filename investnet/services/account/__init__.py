"""Account services package."""

from investnet.services.account.registration import (
    AccountRegistrationService,
    generate_referral_code,
)

__all__ = ["AccountRegistrationService", "generate_referral_code"]
