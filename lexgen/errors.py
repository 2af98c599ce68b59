class BuildError(ValueError):
    pass
