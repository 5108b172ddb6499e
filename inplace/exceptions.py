class InPlaceError(Exception):
    # base exception for all plugin errors.
    pass

class ConfigError(InPlaceError):
    # errors related to plugin options or config files.
    pass

class InvalidPatternError(ConfigError):
    # the pattern option is not a string or a sequence of strings.
    pass

class NoFilesError(InPlaceError):
    # no file survived filtering.
    pass

class EngineNotFoundError(InPlaceError):
    # no engine could be resolved for a file.
    def __init__(self, message: str, filename: str, engine: str):
        super().__init__(message)
        self.filename = filename
        self.engine = engine

class RenderError(InPlaceError):
    # an engine failed while rendering a file.
    def __init__(self, message: str, filename: str, engine: str):
        super().__init__(message)
        self.filename = filename
        self.engine = engine
