class GenerateRandomException(Exception):
    pass


class WeightError(GenerateRandomException, ValueError):
    pass


class UnsupportedTypeError(GenerateRandomException, TypeError):
    pass
