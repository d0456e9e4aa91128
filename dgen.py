'''
.------..------..------..------.
|d.--. ||g.--. ||e.--. ||n.--. |
| :/\: || :/\: || (\/) || :(): |
| (__) || :\/: || :\/: || ()() |
| '--'d|| '--'g|| '--'e|| '--'n|
`------'`------'`------'`------'
seeded record generator for building realistic test collections.
'''

import numpy as np
from faker import Faker
from kollect import Collection, collect
from typing import Any, Callable, Dict, Optional


class Generator:
    """schema interpreter.

    a schema is a dict of field -> spec where a spec is one of:
      'word'                                  a faker provider name
      ('pyint', {'min_value': 1})             a faker provider with arguments
      {'_gen': 'choice', 'from': [...]}       a random pick
      {'_gen': 'ref', 'key': 'name'}          a field generated earlier in the record
      {'_gen': 'computed', 'func': callable}  func(record so far)
      {'_gen': 'nullable', 'spec': ..., 'rate': 0.3}  the spec, or None at the given rate
      [{'_gen_items': spec, '_gen_count': n}] a list of n generated items
    anything else is used literally.
    """

    def __init__(self, seed: Optional[int] = None):
        self._fake = Faker()
        if seed is not None:
            self._fake.seed_instance(seed)
        self._rng = np.random.default_rng(seed)

    def _faker(self, name: str, kwargs: Optional[Dict] = None) -> Any:
        try:
            method = getattr(self._fake, name)
        except AttributeError:
            raise ValueError(f"faker has no provider '{name}'")
        return method(**(kwargs or {}))

    def _directive(self, config: Dict, record: Dict) -> Any:
        kind = config['_gen']
        if kind == 'choice':
            picked = self._rng.choice(len(config['from']))
            return config['from'][int(picked)]
        if kind == 'ref':
            if config['key'] not in record:
                raise ValueError(f"reference to '{config['key']}' not found in current record.")
            return record[config['key']]
        if kind == 'computed':
            return config['func'](record)
        if kind == 'nullable':
            if self._rng.random() < config.get('rate', 0.5):
                return None
            return self.create(config['spec'], record)
        raise ValueError(f"unknown _gen directive: '{kind}'")

    def create(self, schema: Any, record: Optional[Dict] = None) -> Any:
        record = record if record is not None else {}

        if isinstance(schema, dict):
            if '_gen' in schema:
                return self._directive(schema, record)
            built: Dict[str, Any] = {}
            for field, spec in schema.items():
                # later fields can refer to earlier ones
                built[field] = self.create(spec, {**record, **built})
            return built

        if isinstance(schema, list):
            if not schema:
                return []
            item = schema[0]
            count = self._count(item)
            spec = item.get('_gen_items', item) if isinstance(item, dict) else item
            return [self.create(spec, record) for _ in range(count)]

        if isinstance(schema, tuple) and len(schema) == 2 and isinstance(schema[1], dict):
            return self._faker(schema[0], schema[1])

        if isinstance(schema, str) and hasattr(self._fake, schema):
            return self._faker(schema)

        return schema

    def _count(self, item: Any) -> int:
        count = item.get('_gen_count', 5) if isinstance(item, dict) else 5
        if isinstance(count, (list, tuple)):
            low, high = count
            return int(self._rng.integers(low, high, endpoint=True))
        return count


class _SchemaProvider:
    def __init__(self, schema: Any, seed: Optional[int] = None):
        self._schema = schema
        self._generator = Generator(seed)

    def take(self, count: int) -> Collection:
        """`count` generated records, keyed 0..count-1"""
        return collect([self._generator.create(self._schema) for _ in range(count)])

    def take_keyed(self, count: int, key: str) -> Collection:
        """generated records keyed by one of their fields"""
        return self.take(count).key_by(key)

    def take_as(self, count: int, factory: Callable[[Dict], Any]) -> Collection:
        """generated records turned into objects"""
        return self.take(count).map(lambda record: factory(record))


def from_schema(schema: Any, seed: Optional[int] = None) -> _SchemaProvider:
    return _SchemaProvider(schema, seed)
