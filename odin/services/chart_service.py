"""Chart series aggregation over tabular content."""

from typing import Any, Dict, List, Union

from common.constants import QUANTITATIVE_DATA_TYPE
from common.logging_config import get_logger
from odin.domain import TabularContent

logger = get_logger(__name__)

Aggregation = Dict[str, Union[float, List[Any]]]


def _to_number(value: Any):
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    try:
        return float(str(value).strip())
    except ValueError:
        return None


class ChartService:
    def aggregate(
        self,
        content: TabularContent,
        data_type: str,
        category_key: str,
        value_key: str,
    ) -> Aggregation:
        """
        Group rows by category, in first-seen order.

        Quantitative charts sum the numeric values of value_key per category;
        any other data type collects the raw value_key entries per category.
        Rows with no category are ignored.
        """
        quantitative = data_type == QUANTITATIVE_DATA_TYPE
        result: Aggregation = {}
        skipped = 0

        for row in content.rows:
            category = row.get(category_key)
            if category is None or category == "":
                skipped += 1
                continue
            label = str(category)
            value = row.get(value_key)

            if quantitative:
                number = _to_number(value)
                result.setdefault(label, 0)
                if number is None:
                    skipped += 1
                    continue
                result[label] += number
            else:
                result.setdefault(label, []).append(value)

        if skipped:
            logger.debug(f"Ignored {skipped} rows while aggregating {category_key}/{value_key}")

        return result


def build_chart_payload(aggregation: Aggregation, data_type: str) -> Dict[str, list]:
    """
    Turn an aggregation into the stored chart payload.

    Quantitative charts keep the aggregated numbers; other charts count the
    entries collected for each label.
    """
    labels = list(aggregation.keys())
    if data_type == QUANTITATIVE_DATA_TYPE:
        data = list(aggregation.values())
    else:
        data = [len(entries) for entries in aggregation.values()]
    return {"labels": labels, "data": data}
