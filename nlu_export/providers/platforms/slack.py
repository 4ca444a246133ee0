"""Slack integration. Same message objects as generic, tagged for Slack."""

from nlu_export.providers.platforms.generic import GenericPlatform


class SlackPlatform(GenericPlatform):
    name = "slack"
    reply_label_limit = 20
