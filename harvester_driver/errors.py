"""
errors.py: exceptions raised while resolving and validating driver options
"""


class ConfigError(ValueError):
    """
    ConfigError: the populated configuration is inconsistent.
    `option` names the option whose value has to change.
    """

    def __init__(self, message: str, option: str):
        super().__init__(message)
        self.option = option


class MissingImageNameError(ConfigError):
    def __init__(self):
        super().__init__("must specify harvester image name", "harvester-image-name")


class MissingPrivateKeyPathError(ConfigError):
    def __init__(self):
        super().__init__(
            "must specify the ssh private key path of the harvester key pair",
            "harvester-ssh-private-key-path",
        )


class UnknownNetworkTypeError(ConfigError):
    def __init__(self, network_type: str):
        super().__init__(f"unknown network type {network_type}", "harvester-network-type")
        self.network_type = network_type


class MissingNetworkNameError(ConfigError):
    def __init__(self):
        super().__init__("must specify harvester network name", "harvester-network-name")


class OptionError(Exception):
    """Base class for failures while looking up option values"""


class UnknownOptionError(OptionError, KeyError):
    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self):
        return f"unknown option {self.name}"


class OptionTypeError(OptionError, ValueError):
    def __init__(self, name: str, value, expected: str):
        super().__init__(f"option {name} expects {expected}, got {value!r}")
        self.name = name
        self.value = value


class OptionSourceError(OptionError):
    """An option source (file) exists but could not be read"""
