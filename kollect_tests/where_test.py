import suite
from enum import Enum
from kollect import collect

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal
assert_raises = suite.assert_raises

users = collect([
    {'name': 'ada', 'age': 36, 'role': 'admin', 'team': {'name': 'core'}},
    {'name': 'bob', 'age': '25', 'role': 'user', 'team': None},
    {'name': 'cy', 'age': 41, 'role': 'user', 'team': {'name': 'ops'}},
    {'name': 'dee', 'age': None, 'role': None, 'team': {'name': 'core'}},
])


class Status(Enum):
    ACTIVE = 'active'
    INACTIVE = 'inactive'


class Box:
    pass


class Named:
    def __init__(self, label):
        self.label = label

    def __str__(self):
        return self.label


# where

@test("where with a value compares loosely and keeps keys")
def test_where_value():
    assert_equal(users.where('role', 'user').keys().to_list(), [1, 2])
    assert_equal(users.where('age', 25).keys().to_list(), [1])


@test("where with an operator")
def test_where_operator():
    assert_equal(users.where('age', '>', 30).keys().to_list(), [0, 2])
    assert_equal(users.where('age', '<=', 36).keys().to_list(), [0, 1, 3])
    assert_equal(users.where('role', '!=', 'user').keys().to_list(), [0, 3])


@test("where with a single key compares against True")
def test_where_single_key():
    flags = collect([{'active': True}, {'active': False}, {'active': 1}])
    assert_equal(flags.where('active').keys().to_list(), [0, 2])


@test("where with a callback is a plain filter")
def test_where_callback():
    assert_equal(users.where(lambda u: u['name'].startswith('b')).keys().to_list(), [1])


@test("where follows nested key paths")
def test_where_nested():
    assert_equal(users.where('team.name', 'core').keys().to_list(), [0, 3])


@test("where with an unknown operator means loose equality")
def test_where_unknown_operator():
    assert_equal(users.where('age', 'like', 36), users.where('age', 36))


@test("where against None compares with None instead of True")
def test_where_none_value():
    assert_equal(users.where('role', None).keys().to_list(), [3])


@test("an object against a non-object is never equal")
def test_where_object_short_circuit():
    boxes = collect([{'v': Box()}])
    assert_that(boxes.where('v', '=', 1).is_empty(), "object never equals a number")
    assert_equal(boxes.where('v', '!=', 1).count(), 1)
    assert_equal(boxes.where('v', '<>', 'x').count(), 1)


@test("string-like objects compare by their text")
def test_where_string_like():
    labels = collect([{'v': Named('x')}, {'v': Named('y')}])
    assert_equal(labels.where('v', 'x').keys().to_list(), [0])


@test("enum members compare by value")
def test_where_enum():
    rows = collect([{'s': Status.ACTIVE}, {'s': 'inactive'}])
    assert_equal(rows.where('s', Status.ACTIVE).keys().to_list(), [0])
    assert_equal(rows.where('s', 'active').keys().to_list(), [0])
    assert_equal(rows.where('s', Status.INACTIVE).keys().to_list(), [1])


@test("where_strict requires identical types")
def test_where_strict():
    assert_that(users.where_strict('age', 25).is_empty(), "'25' is not strictly 25")
    assert_equal(users.where_strict('age', '25').keys().to_list(), [1])


@test("where_null and where_not_null")
def test_where_null():
    assert_equal(users.where_null('role').keys().to_list(), [3])
    assert_equal(users.where_not_null('role').keys().to_list(), [0, 1, 2])
    assert_equal(collect([1, None, 2]).where_null().all(), {1: None})
    assert_equal(collect([1, None, 2]).where_not_null().to_list(), [1, 2])


# membership

@test("where_in loose and strict")
def test_where_in():
    assert_equal(users.where_in('role', ['admin', 'user']).keys().to_list(), [0, 1, 2])
    assert_equal(users.where_in('age', [25, 41]).keys().to_list(), [1, 2])
    assert_equal(users.where_in_strict('age', [25, 41]).keys().to_list(), [2])
    assert_equal(users.where_in('name', collect(['ada', 'cy'])).keys().to_list(), [0, 2])


@test("where_not_in loose and strict")
def test_where_not_in():
    assert_equal(users.where_not_in('role', ['user']).keys().to_list(), [0, 3])
    assert_equal(users.where_not_in_strict('age', [25]).count(), 4)


# ranges

@test("where_between is inclusive and uses the first and last bound")
def test_where_between():
    values = collect([5, 10, 15, 20])
    assert_equal(values.where_between(None, [10, 15]).to_list(), [10, 15])
    assert_equal(users.where_between('age', [30, 40]).keys().to_list(), [0])
    assert_that(values.where_between(None, [15, 10]).is_empty(), "bounds are order dependent")
    assert_equal(values.where_between(None, [10, 99, 15]).to_list(), [10, 15])


@test("where_not_between keeps values outside the bounds")
def test_where_not_between():
    values = collect([5, 10, 15, 20])
    assert_equal(values.where_not_between(None, [10, 15]).all(), {0: 5, 3: 20})


@test("where_between needs at least one bound")
def test_where_between_empty():
    assert_raises(ValueError, collect([1]).where_between, None, [])


@test("where_instance_of")
def test_where_instance_of():
    mixed = collect([1, 'a', 2.5, Box()])
    assert_equal(mixed.where_instance_of(Box).keys().to_list(), [3])
    assert_equal(mixed.where_instance_of([int, float]).to_list(), [1, 2.5])


# single results

@test("first_where returns the first match or None")
def test_first_where():
    assert_equal(users.first_where('role', 'user')['name'], 'bob')
    assert_equal(users.first_where('age', '>', 40)['name'], 'cy')
    assert_that(users.first_where('age', '>', 100) is None, "no match gives None")


@test("value reads the key from the first item that has it")
def test_value():
    rows = collect([{'a': 1}, {'b': 2}, {'b': 3}])
    assert_equal(rows.value('b'), 2)
    assert_equal(rows.value('c', 'none'), 'none')
    assert_equal(users.value('team.name'), 'core')


# every

@test("every is vacuously true for an empty collection")
def test_every_empty():
    assert_that(collect().every('active'), "nothing to fail")
    assert_that(collect().every(lambda v: False), "callback never runs")


@test("every with a key, a callback and an operator")
def test_every_forms():
    rows = collect([{'a': 1}, {'a': 2}])
    assert_that(rows.every('a', '>', 0), "both above zero")
    assert_that(not rows.every('a', 2), "only one equals 2")
    assert_that(rows.every('a'), "both truthy")
    assert_that(not collect([{'a': 1}, {'a': 0}]).every('a'), "zero is falsy")
    assert_that(not collect([1, 2]).every(lambda v: v > 1), "1 fails")


if __name__ == "__main__":
    suite.run(title="kollect where filters test suite")
