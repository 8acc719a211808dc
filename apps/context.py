# apps/context.py
from contextvars import ContextVar

current_user_id_ctx: ContextVar[int | None] = ContextVar(
    "current_user_id", default=None
)


def set_current_user_id(user_id: int):
    current_user_id_ctx.set(user_id)


def get_current_user_id() -> int | None:
    return current_user_id_ctx.get()
