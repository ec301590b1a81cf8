from enum import Enum
from typing import Dict


class AccessPolicy(Enum):
    PUBLIC = "public"
    AUTHENTICATED = "authenticated"
    AUTHENTICATED_OWNER = "authenticated-owner"


# Two historical route sets disagree on which movie routes need a token.
# Both are kept as named profiles; the product owner picks one through
# AUTH_POLICY_PROFILE. Endpoints not listed are public.
POLICY_PROFILES: Dict[str, Dict[str, AccessPolicy]] = {
    "legacy": {
        "my_collection": AccessPolicy.AUTHENTICATED_OWNER,
    },
    "strict": {
        "get_movie": AccessPolicy.AUTHENTICATED,
        "add_movie": AccessPolicy.AUTHENTICATED,
        "update_movie": AccessPolicy.AUTHENTICATED,
        "delete_movie": AccessPolicy.AUTHENTICATED,
        "my_collection": AccessPolicy.AUTHENTICATED_OWNER,
    },
}

DEFAULT_PROFILE = "strict"


class UnknownPolicyProfileError(ValueError):
    pass


def resolve_policies(
    profile: str = DEFAULT_PROFILE, enforce_owner: bool = True
) -> Dict[str, AccessPolicy]:
    """
    Returns the endpoint -> policy mapping for a named profile.

    With `enforce_owner` off, owner checks fall back to plain authentication.
    """
    if profile not in POLICY_PROFILES:
        raise UnknownPolicyProfileError(
            f"Unknown auth policy profile '{profile}', expected one of {sorted(POLICY_PROFILES)}"
        )

    policies = dict(POLICY_PROFILES[profile])

    if not enforce_owner:
        policies = {
            endpoint: (
                AccessPolicy.AUTHENTICATED
                if policy is AccessPolicy.AUTHENTICATED_OWNER
                else policy
            )
            for endpoint, policy in policies.items()
        }

    return policies


def policy_for(policies: Dict[str, AccessPolicy], endpoint: str) -> AccessPolicy:
    return policies.get(endpoint, AccessPolicy.PUBLIC)
