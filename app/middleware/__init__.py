from app.middleware.error import handle_error, register_error_handlers

__all__ = ["handle_error", "register_error_handlers"]
