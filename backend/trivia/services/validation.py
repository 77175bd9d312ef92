from trivia.errors import ValidationError

# Signed 64-bit range of an INTEGER/BIGINT column
INT_MIN = -(2 ** 63)
INT_MAX = 2 ** 63 - 1


def require_int(value, message='Score must be an integer'):
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(message)
    if not INT_MIN <= value <= INT_MAX:
        raise ValidationError(f'{message} between {INT_MIN} and {INT_MAX}')
    return value
