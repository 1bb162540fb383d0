"""
In-memory collection of course records with simple lookups
"""

from typing import Iterable, Iterator, List, Optional, Union

from .course_record import CourseRecord, Status


class CourseCatalog:
    """Ordered list of CourseRecord objects.

    Every lookup is a linear scan; no indexes are maintained, so records can be
    appended or replaced freely.
    """

    def __init__(self, records: Optional[Iterable[CourseRecord]] = None):
        self.records: List[CourseRecord] = list(records or [])

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[CourseRecord]:
        return iter(self.records)

    def add(self, record: CourseRecord):
        self.records.append(record)

    def replace(self, records: Iterable[CourseRecord]):
        """Discard the current records and use ``records`` instead"""
        self.records = list(records)

    def _first(self, predicate) -> Optional[CourseRecord]:
        for record in self.records:
            if predicate(record):
                return record
        return None

    def _all(self, predicate) -> List[CourseRecord]:
        return [record for record in self.records if predicate(record)]

    def find_by_crn(self, crn: Union[str, int]) -> Optional[CourseRecord]:
        """First record whose CRN matches, or None"""
        try:
            number = int(str(crn).strip())
        except ValueError:
            return None
        return self._first(lambda record: record.crn == number)

    def find_by_course_id(self, course_id: str) -> Optional[CourseRecord]:
        return self._first(lambda record: record.course_id == course_id)

    def find_by_attribute(self, attribute: str) -> List[CourseRecord]:
        return self._all(lambda record: attribute in record.attributes)

    def find_by_instructor(self, instructor: str) -> List[CourseRecord]:
        return self._all(lambda record: record.instructor == instructor)

    def find_by_credits(self, credits: Optional[int]) -> List[CourseRecord]:
        return self._all(lambda record: record.credits == credits)

    def find_by_times(self, times: str) -> List[CourseRecord]:
        return self._all(lambda record: record.times == times)

    def find_by_projected_enrollment(self, projected_enrollment: int) -> List[CourseRecord]:
        return self._all(lambda record: record.projected_enrollment == projected_enrollment)

    def find_by_current_enrollment(self, current_enrollment: int) -> List[CourseRecord]:
        return self._all(lambda record: record.current_enrollment == current_enrollment)

    def find_by_seats_available(self, seats_available: int) -> List[CourseRecord]:
        return self._all(lambda record: record.seats_available == seats_available)

    def find_by_status(self, status: Union[Status, str]) -> List[CourseRecord]:
        """Records with the given status; tokens other than OPEN/CLOSED raise InvalidStatusError"""
        if not isinstance(status, Status):
            status = Status.from_token(status)
        return self._all(lambda record: record.status is status)
