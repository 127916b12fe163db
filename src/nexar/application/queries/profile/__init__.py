from nexar.application.queries.profile.get_profile_query import GetProfileQuery

__all__ = ["GetProfileQuery"]
