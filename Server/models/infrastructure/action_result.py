"""
RoleDesk Server - Action Result Model

Outcome of a role administration action, rendered by the routes.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class ActionResult:
    """Success flag plus the message key describing the outcome"""
    success: bool
    message_key: str

    @classmethod
    def Ok(cls, message_key: str) -> "ActionResult":
        return cls(True, message_key)

    @classmethod
    def Failed(cls, message_key: str) -> "ActionResult":
        return cls(False, message_key)

    @property
    def flash_type(self) -> str:
        return "success" if self.success else "error"
