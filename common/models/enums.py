# -*- coding: utf-8 -*-
"""
    common.models.enums
    ~~~~~~~~~~~~~~~~~~~

    Enums used throughout the project.
"""

from enum import Enum, unique


############
## CONFIG ##
############

@unique
class LogFormat(str, Enum):
    """Logging formats."""

    json = "json"
    plain = "plain"


###########
## MONGO ##
###########

@unique
class Coll(str, Enum):
    """Collection names in MongoDB."""

    SESSIONS = "sessions"
    USERS = "users"


##############
## SESSIONS ##
##############

@unique
class SessionStatus(str, Enum):
    """Publication state of a wellness session."""

    DRAFT = "draft"
    PUBLISHED = "published"
