from .profile import make_profile_figure

__all__ = ["make_profile_figure"]
