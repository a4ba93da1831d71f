from typing import Iterable
from typing import List
from typing import Tuple
from typing import TypedDict

from bottomup.aggregation import AggregatedRecord


class FormattedRecord(TypedDict, total=False):
    functionName: str
    url: str
    selfTime: float
    totalTime: float


def _sort_key(record: AggregatedRecord) -> Tuple[str, str, int]:
    site = record.call_site
    return (site.function_name, str(site.script_id), site.line_number)


def format_bottom_up(
    records: Iterable[AggregatedRecord],
    *,
    include_url: bool = False,
    sort: bool = False,
) -> List[FormattedRecord]:
    if sort:
        records = sorted(records, key=_sort_key)

    result: List[FormattedRecord] = []
    for record in records:
        entry: FormattedRecord = {"functionName": record.function_name}
        if include_url:
            entry["url"] = record.url
        entry["selfTime"] = record.self_time
        entry["totalTime"] = record.total_time
        result.append(entry)
    return result
