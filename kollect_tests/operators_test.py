import suite
from kollect import OperatorPredicate, loose_equals, loose_compare, strict_equals
from kollect.operators import compare, truthy, loose_in, is_numeric_string

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal


# loose equality

@test("None equals the empty string and other falsy values")
def test_loose_none():
    assert_that(loose_equals(None, ''), "None == ''")
    assert_that(loose_equals(None, 0), "None == 0")
    assert_that(loose_equals(None, []), "None == []")
    assert_that(not loose_equals(None, 'a'), "None != 'a'")


@test("numbers and numeric strings compare numerically")
def test_loose_numeric_strings():
    assert_that(loose_equals('1', 1), "'1' == 1")
    assert_that(loose_equals('1e1', '10'), "'1e1' == '10'")
    assert_that(loose_equals(' 2', 2.0), "leading whitespace is allowed")
    assert_that(not loose_equals('abc', 0), "a non-numeric string is not 0")
    assert_equal(loose_compare('9', '10'), -1)
    assert_equal(loose_compare('abc', 'abd'), -1)


@test("booleans compare by truthiness")
def test_loose_bools():
    assert_that(loose_equals(True, 'a'), "True == 'a'")
    assert_that(loose_equals(False, '0'), "False == '0'")
    assert_that(not loose_equals(True, 0), "True != 0")


@test("lists compare element-wise, dicts by key")
def test_loose_arrays():
    assert_that(loose_equals([1, 2], ['1', '2']), "members compare loosely")
    assert_equal(loose_compare([1], [1, 2]), -1)
    assert_that(loose_equals({'a': 1, 'b': 2}, {'b': '2', 'a': '1'}), "dict order does not matter")
    assert_that(not loose_equals({'a': 1}, {'b': 1}), "different keys")
    assert_equal(loose_compare([1], 5), 1)
    assert_equal(loose_compare(5, [1]), -1)


@test("nan is never equal to itself")
def test_loose_nan():
    nan = float('nan')
    assert_that(not loose_equals(nan, nan), "nan != nan")


@test("truthy treats '0' as false")
def test_truthy():
    assert_that(not truthy('0'), "'0' is falsy")
    assert_that(truthy('0.0'), "'0.0' is truthy")
    assert_that(not truthy([]), "empty list is falsy")


@test("numeric string detection")
def test_numeric_strings():
    assert_that(is_numeric_string('-1.5e3'), "scientific notation")
    assert_that(is_numeric_string('.5'), "leading dot")
    assert_that(not is_numeric_string('1a'), "trailing letters")
    assert_that(not is_numeric_string(5), "ints are not strings")


# strict equality

@test("strict equality needs the same type")
def test_strict():
    assert_that(not strict_equals(1, 1.0), "int vs float")
    assert_that(not strict_equals(1, True), "int vs bool")
    assert_that(strict_equals([1, 'a'], [1, 'a']), "equal lists")
    assert_that(not strict_equals({'a': 1, 'b': 2}, {'b': 2, 'a': 1}), "dict order matters")
    marker = object()
    assert_that(strict_equals(marker, marker), "same instance")
    assert_that(not strict_equals(object(), object()), "different instances")


@test("loose_in switches between loose and strict membership")
def test_loose_in():
    assert_that(loose_in('1', [1, 2]), "loose membership")
    assert_that(not loose_in('1', [1, 2], strict=True), "strict membership")


# operator table

@test("every operator token")
def test_operator_table():
    assert_that(compare(1, '=', '1'), "=")
    assert_that(compare(1, '==', '1'), "==")
    assert_that(compare(1, '!=', 2), "!=")
    assert_that(compare(1, '<>', 2), "<>")
    assert_that(compare(1, '<', 2), "<")
    assert_that(compare(3, '>', 2), ">")
    assert_that(compare(2, '<=', 2), "<=")
    assert_that(compare(2, '>=', '2'), ">=")
    assert_that(compare(2, '===', 2), "===")
    assert_that(compare(2, '!==', '2'), "!==")
    assert_equal(compare(3, '<=>', 5), -1)
    assert_equal(compare(5, '<=>', 5), 0)
    assert_equal(compare(7, '<=>', 5), 1)


@test("unknown operators fall back to loose equality")
def test_unknown_operator():
    assert_that(compare(1, 'contains', '1'), "falls back to ==")
    assert_that(not compare(1, 'contains', 2), "still an equality check")


# predicate

@test("from_arguments normalizes the call shapes")
def test_from_arguments():
    assert_equal(OperatorPredicate.from_arguments('a'), OperatorPredicate('a', '=', True))
    assert_equal(OperatorPredicate.from_arguments('a', 5), OperatorPredicate('a', '=', 5))
    assert_equal(OperatorPredicate.from_arguments('a', '>', 5), OperatorPredicate('a', '>', 5))
    assert_equal(OperatorPredicate.from_arguments('a', None), OperatorPredicate('a', '=', None))
    callback = lambda v: True
    assert_that(OperatorPredicate.from_arguments(callback) is callback, "callables pass through")


@test("predicates compare by value and read nested keys")
def test_predicate_call():
    predicate = OperatorPredicate('user.age', '>=', 18)
    assert_that(predicate({'user': {'age': 20}}), "20 >= 18")
    assert_that(not predicate({'user': {'age': 12}}), "12 < 18")
    assert_that(not predicate({'user': {}}), "missing value is None")
    assert_equal(predicate, OperatorPredicate('user.age', '>=', 18))


if __name__ == "__main__":
    suite.run(title="kollect comparison operators test suite")
