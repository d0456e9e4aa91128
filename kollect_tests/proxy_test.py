import suite
from dataclasses import dataclass, field
from kollect import Collection, UndeclaredProxyPropertyError, HigherOrderCollectionProxy, collect

test = suite.test
assert_that = suite.assert_that
assert_equal = suite.assert_equal
assert_raises = suite.assert_raises


@dataclass
class Person:
    name: str
    age: int
    active: bool = True
    visits: list = field(default_factory=list)

    def greet(self, greeting):
        return f"{greeting}, {self.name}"

    def touch(self):
        self.visits.append('touched')


class Team(Collection):
    pass


def people():
    return collect([Person('ada', 36), Person('bob', 25, False), Person('cy', 41)])


# property access

@test("a proxied property maps over every element")
def test_proxy_property():
    assert_equal(people().higher.map.name.to_list(), ['ada', 'bob', 'cy'])
    assert_equal(people().higher['map']['age'].to_list(), [36, 25, 41])
    assert_equal(people().higher_order('map').get('age').to_list(), [36, 25, 41])


@test("proxied properties read dict keys too")
def test_proxy_dict():
    rows = collect([{'n': 1}, {'n': 2}])
    assert_equal(rows.higher.map.n.to_list(), [1, 2])
    assert_equal(rows.higher.sum.n, 3)


@test("filter, sum, max and sort_by through the proxy")
def test_proxy_operations():
    assert_equal(people().higher.filter.active.map(lambda p: p.name).to_list(), ['ada', 'cy'])
    assert_equal(people().higher.sum.age, 102)
    assert_equal(people().higher.max.age, 41)
    assert_equal(people().higher.sort_by.age.keys().to_list(), [1, 0, 2])
    assert_that(people().higher.every.active is False, "bob is inactive")
    assert_that(people().higher.contains.active, "somebody is active")


# method calls

@test("a proxied method call runs on every element")
def test_proxy_call():
    assert_equal(people().higher.map.call('greet', 'hi').to_list(), ['hi, ada', 'hi, bob', 'hi, cy'])


@test("each through the proxy runs side effects and returns the collection")
def test_proxy_each():
    team = people()
    result = team.higher.each.call('touch')
    assert_that(result is team, "each returns the collection")
    assert_that(team.every(lambda p: p.visits == ['touched']), "every element was touched")


@test("string elements use their own methods when they have them")
def test_proxy_string_method():
    assert_equal(collect(['a', 'b']).higher.map.call('upper').to_list(), ['A', 'B'])


@test("other string elements name a class or module called statically")
def test_proxy_static_call():
    assert_equal(collect(['math']).higher.map.call('sqrt', 16).to_list(), [4.0])
    assert_raises(LookupError, collect(['no.such.thing']).higher.map.call, 'run')


@test("a string naming a type calls the type even when str has the method")
def test_proxy_static_call_shadowing_str():
    assert_equal(collect(['builtins.str']).higher.map.call('upper', 'abc').to_list(), ['ABC'])
    assert_equal(collect(['builtins.str']).higher.map.call('count', 'banana', 'a').to_list(), [3])
    assert_equal(collect(['plain words']).higher.map.call('title').to_list(), ['Plain Words'])


# allow-list

@test("operations outside the allow-list are rejected")
def test_proxy_undeclared():
    error = assert_raises(UndeclaredProxyPropertyError, lambda: people().higher.tap)
    assert_equal(error.name, 'tap')
    assert_that(isinstance(error, AttributeError), "undeclared proxies are attribute errors")
    assert_equal(str(error), "Property [tap] does not exist on this Collection instance.")
    assert_raises(UndeclaredProxyPropertyError, people().higher_order, 'count')


@test("the allow-list can be extended per class")
def test_proxy_register():
    Team.proxy('where')
    try:
        team = Team([Person('ada', 36), Person('bob', 25, False)])
        assert_equal(team.higher.where.active.count(), 1)
        assert_that(Team.has_proxy('map'), "defaults are inherited")
        assert_that(not Collection.has_proxy('where'), "the parent is unaffected")
    finally:
        Team.flush_proxies()
    assert_that(not Team.has_proxy('where'), "flush removes the extension")
    assert_that(Team.has_proxy('map'), "flush keeps inherited names")


@test("the default allow-list is exposed")
def test_proxy_listing():
    names = Collection.proxies()
    for name in ('map', 'filter', 'sum', 'unique', 'when', 'unless'):
        assert_that(name in names, f"{name} is proxyable")
    assert_that('map' in dir(people().higher), "dir lists the proxyable operations")


@test("every access builds a fresh proxy")
def test_proxy_fresh():
    team = people()
    first = team.higher_order('map')
    second = team.higher_order('map')
    assert_that(first is not second, "proxies are not cached")
    assert_that(isinstance(first, HigherOrderCollectionProxy), "higher_order returns a proxy")
    assert_equal(first.method, 'map')


if __name__ == "__main__":
    suite.run(title="kollect higher-order proxy test suite")
