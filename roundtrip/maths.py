"""
Contains all the math helpers that don't quite fit anywhere else
"""


def normalizeToRange(v, a, b):
    """
    Normalizes the input value between a and b

    :param v: value to normalize
    :param a: minimum value to normalize to
    :param b: maximum value to normalize to
    :return: the value v normalized within the range a->b
    """
    return (v - a) / (b - a)
