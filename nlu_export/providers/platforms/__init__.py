from .facebook import FacebookPlatform
from .generic import GenericPlatform
from .google import GooglePlatform
from .skype import SkypePlatform
from .slack import SlackPlatform

__all__ = [
    "FacebookPlatform",
    "GenericPlatform",
    "GooglePlatform",
    "SkypePlatform",
    "SlackPlatform",
]
