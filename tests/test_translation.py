import unittest
from interviewer.translation.engine import Translator
from interviewer.translation.sources import read_csv_roster, read_json_network, ExternalDataError
from pathlib import Path

PROTOCOL_PATH = Path(__file__).parent / 'fixtures' / 'protocol.json'

PERSON = '4aebf73e-95e3-4fd1-95e7-237dcc4a4466'
NAME = '6be95f85-c2d9-4daf-9de1-3939418af888'
AGE = 'e13ca72d-aefe-4f48-841d-09f020e0e988'
LAYOUT = '0ff25001-a2b8-46de-82a5-576a2a9bfc2f'
CLOSENESS = 'c5fee926-01aa-4e8b-a1a0-0bf2e6fd8ae1'
FRIEND = 'd6a3c0f2-8a3e-4b7e-9f4b-6c1a3e5b7d90'
STRENGTH = '5a0e8c9b-7d6f-4e3a-b2c1-0f9e8d7c6b5a'
EGO_AGE = 'a1b2c3d4-e5f6-4a7b-8c9d-0e1f2a3b4c5d'


class TestTranslator(unittest.TestCase):
    def setUp(self):
        self.translator = Translator.from_json_path(PROTOCOL_PATH)

    def test_resolve_type(self):
        self.assertEqual(self.translator.resolve_type('node', 'person'), PERSON)
        self.assertEqual(self.translator.resolve_type('node', PERSON), PERSON)
        self.assertEqual(self.translator.resolve_type('edge', 'friend'), FRIEND)
        self.assertEqual(self.translator.resolve_type('node', 'animal'), 'animal')

    def test_translate_attributes(self):
        attrs = {'name': 'Alice', 'age': '34', 'layout_x': 0.2, 'layout_y': 0.7, 'closeness_2': True}
        out = self.translator.translate_attributes('node', PERSON, attrs)
        self.assertEqual(out, {
            NAME: 'Alice',
            AGE: '34',
            f'{LAYOUT}_x': 0.2,
            f'{LAYOUT}_y': 0.7,
            f'{CLOSENESS}_2': True,
        })
        self.assertEqual(self.translator.unresolved_labels(), [])

    def test_unresolved_labels_are_kept_and_reported(self):
        out = self.translator.translate_attributes('node', PERSON, {'nickname': 'Al', 'closeness_9': True})
        self.assertEqual(out, {'nickname': 'Al', 'closeness_9': True})
        self.assertEqual(
            self.translator.unresolved_labels(),
            [('node', 'closeness_9'), ('node', 'nickname')],
        )
        self.assertEqual(self.translator.report().coverage, 0.0)

    def test_canonical_keys_count_as_resolved(self):
        self.translator.translate_attributes('node', PERSON, {AGE: 5})
        self.assertEqual(self.translator.report().resolved[('node', AGE)], 1)
        self.assertEqual(self.translator.unresolved_labels(), [])

    def test_later_label_overwrites_same_key(self):
        out = self.translator.translate_attributes('node', PERSON, {'age': 30, AGE: 31})
        self.assertEqual(out, {AGE: 31})

    def test_translate_network(self):
        network = {
            'nodes': [{'type': 'person', 'attributes': {'name': 'Bea'}}],
            'edges': [{'type': 'friend', 'from': 1, 'to': 2, 'attributes': {'strength_strong': True}}],
            'ego': {'attributes': {'ego_age': 40}},
        }
        out = self.translator.translate_network(network)
        self.assertEqual(out['nodes'][0], {'type': PERSON, 'attributes': {NAME: 'Bea'}})
        self.assertEqual(out['edges'][0]['type'], FRIEND)
        self.assertEqual(out['edges'][0]['from'], 1)
        self.assertEqual(out['edges'][0]['attributes'], {f'{STRENGTH}_strong': True})
        self.assertEqual(out['ego']['attributes'], {EGO_AGE: 40})
        # input untouched
        self.assertEqual(network['nodes'][0]['type'], 'person')

    def test_default_type_for_roster(self):
        t = Translator.from_json_path(PROTOCOL_PATH, default_type='person')
        nodes = read_csv_roster('name,age\nAlice,34\nBob,\n')
        out = [t.translate_entity('node', n) for n in nodes]
        self.assertEqual(out[0], {'type': PERSON, 'attributes': {NAME: 'Alice', AGE: '34'}})
        self.assertEqual(out[1]['attributes'], {NAME: 'Bob'})

    def test_unknown_type_keeps_attributes(self):
        out = self.translator.translate_entity('node', {'type': 'animal', 'attributes': {'name': 'Rex'}})
        self.assertEqual(out, {'type': 'animal', 'attributes': {'name': 'Rex'}})

    def test_type_labels_are_reported(self):
        self.translator.translate_entity('node', {'type': 'animal'})
        self.translator.translate_entity('node', {'type': 'person'})
        self.translator.translate_entity('edge', {'type': FRIEND})
        report = self.translator.report()
        self.assertEqual(self.translator.unresolved_labels(), [('node', 'type:animal')])
        self.assertEqual(report.resolved[('node', 'type:person')], 1)
        self.assertEqual(report.resolved[('edge', f'type:{FRIEND}')], 1)
        self.assertAlmostEqual(report.coverage, 2 / 3)


class TestSources(unittest.TestCase):
    def test_roster_skips_blank_rows(self):
        nodes = read_csv_roster('\ufeffname,age\n\nAlice,34\n,\n')
        self.assertEqual(nodes, [{'attributes': {'name': 'Alice', 'age': '34'}}])

    def test_roster_requires_header(self):
        with self.assertRaises(ExternalDataError):
            read_csv_roster('')

    def test_json_network(self):
        net = read_json_network('{"nodes": [{"type": "person"}, 3], "ego": []}')
        self.assertEqual(net, {'nodes': [{'type': 'person'}], 'edges': [], 'ego': {}})

    def test_json_network_errors(self):
        for bad in ('[1, 2]', '{"nodes": {}}', '{"edges": 1}', '{nope'):
            with self.assertRaises(ExternalDataError):
                read_json_network(bad)


if __name__ == '__main__':
    unittest.main()
