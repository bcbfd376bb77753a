from ukvalidator.api.main import app

__all__ = ["app"]
