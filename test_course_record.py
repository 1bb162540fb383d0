#!/usr/bin/env python3
"""
Tests for CourseRecord, Status and row normalization
"""

import os
import shutil
import tempfile
import unittest

from wm_courselist.course_record import (CourseRecord, Status, clean_text,
                                         normalize_row, parse_attributes,
                                         parse_credits)
from wm_courselist.errors import (ArityError, InvalidFieldError,
                                  InvalidStatusError)
from wm_courselist.persistence import load_json, save_json


def make_row(**overrides):
    row = {
        'crn': '\n10001\n',
        'course_id': ' BIOL 203 01 ',
        'attributes': 'NQR, CSI',
        'title': 'Principles of Biology\r\n',
        'instructor': 'Smith, Jane',
        'credits': '4',
        'times': 'MWF 0900-0950',
        'projected': '40',
        'current': '38',
        'seats': '2*',
        'status': 'OPEN',
    }
    row.update(overrides)
    return list(row.values())


class TestNormalizeRow(unittest.TestCase):
    """Test converting raw table rows into CourseRecord objects"""

    def test_valid_row(self):
        """Test every field is cleaned and typed"""
        record = normalize_row(make_row())

        self.assertEqual(record.crn, 10001)
        self.assertEqual(record.course_id, "BIOL 203 01")
        self.assertEqual(record.attributes, ["NQR", "CSI"])
        self.assertEqual(record.title, "Principles of Biology")
        self.assertEqual(record.instructor, "Smith, Jane")
        self.assertEqual(record.credits, 4)
        self.assertEqual(record.times, "MWF 0900-0950")
        self.assertEqual(record.projected_enrollment, 40)
        self.assertEqual(record.current_enrollment, 38)
        self.assertEqual(record.seats_available, 2)
        self.assertIs(record.status, Status.OPEN)
        self.assertTrue(record.is_open)

    def test_seats_available_asterisk_and_newline(self):
        """Test the overenrollment marker is stripped from seats available"""
        record = normalize_row(make_row(seats='12*\n'))
        self.assertEqual(record.seats_available, 12)

    def test_negative_seats_available(self):
        record = normalize_row(make_row(seats=' -3*', status='CLOSED'))
        self.assertEqual(record.seats_available, -3)
        self.assertIs(record.status, Status.CLOSED)
        self.assertFalse(record.status_as_bool)

    def test_wrong_arity(self):
        """Test rows that are not exactly 11 fields are rejected"""
        with self.assertRaises(ArityError):
            normalize_row(make_row()[:10])
        with self.assertRaises(ArityError):
            normalize_row(make_row() + ['extra'])
        with self.assertRaises(ArityError):
            normalize_row([])

    def test_non_sequence_rows(self):
        """Test inputs that are not a list of cells are rejected as rows"""
        for row in [None, 11, "x" * 11, {str(i): i for i in range(11)}]:
            with self.subTest(row=row):
                with self.assertRaises(ArityError):
                    normalize_row(row)

    def test_unrecognized_credits(self):
        with self.assertRaises(InvalidFieldError):
            normalize_row(make_row(credits='abc'))

    def test_invalid_status(self):
        """Test only OPEN and CLOSED are accepted"""
        for status in ['PENDING', '', 'open', 'Closed', None]:
            with self.subTest(status=status):
                with self.assertRaises(InvalidStatusError):
                    normalize_row(make_row(status=status))

    def test_status_surrounding_whitespace(self):
        record = normalize_row(make_row(status='\n CLOSED \n'))
        self.assertIs(record.status, Status.CLOSED)

    def test_variable_credits(self):
        """Test variable-credit courses have no credits value"""
        self.assertIsNone(normalize_row(make_row(credits=None)).credits)
        self.assertIsNone(normalize_row(make_row(credits=' \n')).credits)
        self.assertIsNone(normalize_row(make_row(credits='1-4')).credits)
        self.assertEqual(normalize_row(make_row(credits='3\n')).credits, 3)

    def test_empty_attributes(self):
        record = normalize_row(make_row(attributes=' \n'))
        self.assertEqual(record.attributes, [])

    def test_invalid_numeric_fields(self):
        """Test numeric fields other than credits must parse"""
        cases = [
            {'crn': 'abc'},
            {'projected': ''},
            {'current': 'n/a'},
            {'seats': '*'},
            {'current': '-1'},
        ]
        for overrides in cases:
            with self.subTest(overrides=overrides):
                with self.assertRaises(InvalidFieldError):
                    normalize_row(make_row(**overrides))


class TestCourseRecord(unittest.TestCase):
    """Test the CourseRecord dataclass"""

    def test_crn_display_is_fixed_width(self):
        record = CourseRecord(crn=1234, course_id="MATH 111 01")
        self.assertEqual(record.crn_display, "01234")

    def test_status_token_is_converted(self):
        record = CourseRecord(crn=1, course_id="X", status="OPEN")
        self.assertIs(record.status, Status.OPEN)

    def test_invalid_status_rejected_on_construction(self):
        with self.assertRaises(InvalidStatusError):
            CourseRecord(crn=1, course_id="X", status="PENDING")

    def test_negative_enrollment_rejected_on_construction(self):
        """Test enrollment counts below zero are rejected however the record is built"""
        with self.assertRaises(InvalidFieldError):
            CourseRecord(crn=1, course_id="X", projected_enrollment=-3)
        with self.assertRaises(InvalidFieldError):
            CourseRecord(crn=1, course_id="X", current_enrollment=-1)
        record = CourseRecord(crn=1, course_id="X", seats_available=-4)
        self.assertEqual(record.seats_available, -4)

    def test_field_order(self):
        self.assertEqual(CourseRecord.field_names(), [
            'crn', 'course_id', 'attributes', 'title', 'instructor', 'credits',
            'times', 'projected_enrollment', 'current_enrollment',
            'seats_available', 'status',
        ])

    def test_status_bool_conversion(self):
        self.assertIs(Status.from_bool(True), Status.OPEN)
        self.assertIs(Status.from_bool(False), Status.CLOSED)
        self.assertTrue(Status.OPEN.as_bool())
        self.assertFalse(Status.CLOSED.as_bool())


class TestHelpers(unittest.TestCase):

    def test_clean_text(self):
        self.assertEqual(clean_text("  a\r\nb\n "), "ab")
        self.assertEqual(clean_text(None), "")

    def test_parse_attributes_list_input(self):
        self.assertEqual(parse_attributes([" C100\n", "", "NQR"]), ["C100", "NQR"])

    def test_parse_credits(self):
        self.assertEqual(parse_credits(3), 3)
        self.assertIsNone(parse_credits("1 - 3"))

    def test_parse_credits_rejects_text(self):
        """Test unrecognized credit text is an error, not variable credit"""
        for value in ["abc", "VAR", "3.5", "1-"]:
            with self.subTest(value=value):
                with self.assertRaises(InvalidFieldError):
                    parse_credits(value)


class TestNormalizeThenPersist(unittest.TestCase):
    """Test normalized records survive a JSON save and reload unchanged"""

    def setUp(self):
        self.temp_dir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_round_trip(self):
        rows = [
            make_row(),
            make_row(crn='10002', attributes='', credits='', seats='-1*', status='CLOSED'),
            make_row(crn='10003', title='Lab: "Cells", Tissues', credits='1-3'),
        ]
        records = [normalize_row(row) for row in rows]
        path = os.path.join(self.temp_dir, "classes.json")

        save_json(records, path)

        self.assertEqual(load_json(path), records)


if __name__ == "__main__":
    unittest.main()
