"""Package comparison.

Computes every package against one fiscal-year snapshot and picks the
package with the highest monthly_adjusted net. Comparisons are
all-or-nothing: the first failing package (in submission order) aborts the
whole comparison with its own error.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, List, Optional, Sequence

from pydantic import ValidationError

from ..config import get_active_fiscal_year
from ..errors import InvalidInput
from ..schemas import ComparisonRequest, ComparisonResult, PackageInput, PackageResult
from ..taxes import FiscalYearConfig
from .calculator import calculate_package

logger = logging.getLogger(__name__)


def package_label(package: PackageInput, index: int) -> str:
    """Display name of a package; unnamed packages are numbered from 1."""
    return package.name or f"Package {index + 1}"


def select_best(results: Sequence[PackageResult]) -> PackageResult:
    """Highest monthly_adjusted wins; ties go to the first submitted."""
    best = results[0]
    for result in results[1:]:
        if result.calculation.monthly_adjusted > best.calculation.monthly_adjusted:
            best = result
    return best


def compare(
    packages: Sequence[PackageInput],
    config: Optional[FiscalYearConfig] = None,
    max_workers: Optional[int] = None,
) -> ComparisonResult:
    """Compute and rank packages.

    Args:
        packages: Packages in submission order
        config: Fiscal-year snapshot; defaults to the active one, captured
            once for the whole comparison
        max_workers: Compute packages on a thread pool when > 1

    Returns:
        ComparisonResult with results in submission order, the best
        package and the fiscal-year metadata used

    Raises:
        InvalidInput: Empty package list, or the first package error
        UnsupportedCombination: From the first package that hits one
    """
    if not packages:
        raise InvalidInput("At least one package is required", field="packages")

    if config is None:
        config = get_active_fiscal_year()

    if max_workers and max_workers > 1 and len(packages) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            futures = [executor.submit(calculate_package, p, config) for p in packages]
            # result() re-raises, so iterating in order surfaces the first failure
            calculations = [f.result() for f in futures]
    else:
        calculations = [calculate_package(p, config) for p in packages]

    results = [
        PackageResult(index=i, package_name=package_label(p, i), calculation=calc)
        for i, (p, calc) in enumerate(zip(packages, calculations))
    ]
    best = select_best(results)

    logger.info(
        f"Compared {len(results)} packages for fiscal year {config.year}: "
        f"best is {best.package_name} ({best.calculation.monthly_adjusted:,.2f}/month)"
    )
    return ComparisonResult(results=results, best=best, fiscal_year=config.meta())


def _error_field(error: ValidationError) -> Optional[str]:
    errors = error.errors()
    if not errors:
        return None
    return ".".join(str(part) for part in errors[0]["loc"])


def parse_request(payload: Dict[str, Any]) -> List[PackageInput]:
    """Validate a raw {"packages": [...]} mapping.

    Raises:
        InvalidInput: Naming the first offending field
    """
    try:
        request = ComparisonRequest.model_validate(payload)
    except ValidationError as e:
        field = _error_field(e)
        raise InvalidInput(f"Invalid comparison request ({field}): {e}", field=field) from e
    return request.packages


def compare_request(
    payload: Dict[str, Any],
    config: Optional[FiscalYearConfig] = None,
    max_workers: Optional[int] = None,
) -> ComparisonResult:
    """Compare packages given in wire form."""
    return compare(parse_request(payload), config=config, max_workers=max_workers)
