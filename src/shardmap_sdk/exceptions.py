"""
Custom exception hierarchy for the shard map manager SDK.
"""


class ShardMapError(Exception):
    """Base exception for all shard map SDK errors."""
    pass


# === Credential Validation Errors ===

class CredentialValidationError(ShardMapError, ValueError):
    """Base exception for connection string / credential validation failures."""
    def __init__(self, message: str, field_name: str = "", parameter_name: str = "connection_string"):
        self.field_name = field_name
        self.parameter_name = parameter_name
        super().__init__(message)


class MalformedConnectionString(CredentialValidationError):
    """Connection string does not parse under the connection string grammar."""
    def __init__(self, reason: str, parameter_name: str = "connection_string"):
        self.reason = reason
        super().__init__(
            f"Malformed connection string in parameter '{parameter_name}': {reason}",
            parameter_name=parameter_name,
        )


class MissingRequiredField(CredentialValidationError):
    """A mandatory connection string property is absent or empty."""
    def __init__(self, field_name: str, parameter_name: str = "connection_string"):
        super().__init__(
            f"Connection string property '{field_name}' is required "
            f"in parameter '{parameter_name}'",
            field_name=field_name,
            parameter_name=parameter_name,
        )


class DisallowedField(CredentialValidationError):
    """A property is set that conflicts with a supplied secure credential."""
    def __init__(self, field_name: str, parameter_name: str = "connection_string"):
        super().__init__(
            f"Connection string property '{field_name}' is not allowed "
            f"in parameter '{parameter_name}' when a secure credential is supplied",
            field_name=field_name,
            parameter_name=parameter_name,
        )


# === Credential Errors ===

class CredentialError(ShardMapError):
    """A secure credential could not be constructed or looked up."""
    def __init__(self, message: str, key: str = ""):
        self.key = key
        super().__init__(message)


# === Config Errors ===

class ConfigError(ShardMapError):
    """Configuration error."""
    pass
