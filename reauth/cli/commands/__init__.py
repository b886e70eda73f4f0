from reauth.cli.commands import backends, check, verify

__all__ = ["backends", "check", "verify"]
