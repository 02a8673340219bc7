#!/usr/bin/env python3
from .message import Message
from .messaging import deliver
from .translator import translate

__all__ = ["translate", "deliver", "Message"]
