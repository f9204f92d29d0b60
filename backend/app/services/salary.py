import re
from typing import Optional

# 단위 접미사 -> 배수
_MULTIPLIERS = {
    "k": 1_000,
    "nghìn": 1_000,
    "m": 1_000_000,
    "tr": 1_000_000,
    "triệu": 1_000_000,
}

_SALARY_PATTERN = re.compile(r"(\d+(?:[.,]\d+)*)\s*(triệu|nghìn|tr|k|m)?(?![a-zà-ỹ])")


def _to_number(raw: str) -> float:
    """'1,000,000' / '1.000.000' 은 천 단위 구분, '1.5' / '1,5' 는 소수점으로 해석"""
    separators = re.findall(r"[.,]", raw)
    if not separators:
        return float(raw)

    groups = re.split(r"[.,]", raw)
    if len(separators) > 1 or len(groups[-1]) == 3:
        return float("".join(groups))
    return float(f"{groups[0]}.{groups[1]}")


def parse_salary(salary_string: Optional[str]) -> Optional[int]:
    """
    급여 표시 문자열을 숫자로 변환합니다.

    Args:
        salary_string: 예) "1,000", "15 triệu", "1.5M", "20k USD", "Negotiable"

    Returns:
        정수 급여 값. 숫자가 없으면 None (협의 등)
    """
    if not salary_string or not salary_string.strip():
        return None

    match = _SALARY_PATTERN.search(salary_string.strip().lower())
    if not match:
        return None

    value = _to_number(match.group(1))
    unit = match.group(2)
    if unit:
        value *= _MULTIPLIERS[unit]
    return int(round(value))
