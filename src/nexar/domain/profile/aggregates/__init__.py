from nexar.domain.profile.aggregates.profile import DEFAULT_PROFILE_NAME, Profile

__all__ = [
    "DEFAULT_PROFILE_NAME",
    "Profile",
]
