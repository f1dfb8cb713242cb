"""Tests the external editor round trip."""

import shlex
import unittest
from datetime import date, time

from reti.STORAGE.errors import EditorError
from reti.STORAGE.model import Day, Part
from reti.TIMESHEET import editor


def replacing_editor(content):
    # A shell "editor" that overwrites the file it is given
    script = f'printf "%s\\n" {shlex.quote(content)} > "$0"'
    return f'sh -c {shlex.quote(script)}'


class BuildEditTextTest(unittest.TestCase):

    def test_days(self):
        days = [Day(date(2016, 4, 25), [Part(time(8, 0), time(12, 0))]),
                Day(date(2016, 4, 26), [Part(time(9, 0))])]
        self.assertEqual(editor.build_edit_text(days),
                         '2016-04-25 08:00-12:00\n2016-04-26 09:00')

    def test_today_with_parts(self):
        today = Day(date(2016, 4, 25), [Part(time(8, 0))])
        self.assertEqual(editor.build_edit_text([], today), '2016-04-25 08:00')

    def test_template(self):
        text = editor.build_edit_text([], Day(date(2016, 4, 25)))
        self.assertTrue(text.startswith(editor.EDIT_TEMPLATE))
        self.assertTrue(text.endswith('2016-04-25 '))


class RunEditorTest(unittest.TestCase):

    def test_unchanged(self):
        self.assertEqual(editor.run_editor('2016-04-25 08:00', 'true'),
                         '2016-04-25 08:00\n')

    def test_replaced(self):
        edited = editor.run_editor('2016-04-25 08:00',
                                   replacing_editor('2016-04-25 09:00-10:00'))
        self.assertEqual(edited, '2016-04-25 09:00-10:00\n')

    def test_bad_bytes_replaced(self):
        script = 'printf "2016-04-25 09:00-10:00 # caf\\351\\n" > "$0"'
        edited = editor.run_editor('2016-04-25 08:00',
                                   f'sh -c {shlex.quote(script)}')
        self.assertEqual(edited, '2016-04-25 09:00-10:00 # caf\ufffd\n')

    def test_failure_status(self):
        with self.assertRaises(EditorError):
            editor.run_editor('2016-04-25 08:00', 'false')

    def test_missing_editor(self):
        with self.assertRaises(EditorError):
            editor.run_editor('x', 'reti-no-such-editor-binary')


if __name__ == '__main__':
    unittest.main()
