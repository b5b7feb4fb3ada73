class DisplayContentError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(DisplayContentError):
    # errors related to configuration: bad toml, unresolvable path templates, malformed filters.
    pass

class DiscoveryError(DisplayContentError):
    # errors while listing a configured folder.
    pass

class SizeQueryError(DisplayContentError):
    # errors while reading the size of a discovered file.
    pass

class DownloadError(DisplayContentError):
    # errors while streaming a file to a download sink.
    pass

class StepStateError(DisplayContentError):
    # step used out of its initialize-once lifecycle.
    pass
