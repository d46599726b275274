from plaza.application.context.identity import AuthenticatedIdentity

__all__ = ["AuthenticatedIdentity"]
