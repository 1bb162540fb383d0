"""
BeautifulSoup helpers for locating the course list dropdowns and result table
"""

from typing import List

from bs4 import BeautifulSoup

from .errors import DiscoveryError

TERM_SELECT_ID = 'term_code'
SUBJECT_SELECT_ID = 'term_subj'


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, 'html.parser')


def dropdown_values(soup: BeautifulSoup, element_id: str) -> List[str]:
    """Option values of the <select> with the given id, in page order"""
    select = soup.find(id=element_id)
    if select is None:
        raise DiscoveryError(f"Dropdown '{element_id}' not found on course list page")
    # An option without a value attribute submits its text
    return [option.get('value', option.get_text()) for option in select.find_all('option')]


def table_rows(soup: BeautifulSoup) -> List[List[str]]:
    """Raw text of every <td> for each row of the first table body"""
    tbody = soup.find('tbody')
    if tbody is None:
        raise DiscoveryError("Results table body not found on search results page")
    rows = []
    for tr in tbody.find_all('tr', recursive=False):
        rows.append([td.get_text() for td in tr.find_all('td')])
    return rows
