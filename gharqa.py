# gharqa.py

import logging
from typing import List

from schemas import CalculationInput, GharqaInput, GharqaResult
from calculator import calculate_inheritance
from faraid.errors import InvalidInput

logger = logging.getLogger(__name__)


def solve_gharqa(gharqa_input: GharqaInput) -> List[GharqaResult]:
    """
    Simultaneous deaths (al-gharqa): the decedents do not inherit from each
    other, so every problem is solved on its own estate and heirs.
    """
    names = [p.problem_name for p in gharqa_input.problems]
    if not names:
        raise InvalidInput("At least one problem is required")
    if len(set(names)) != len(names):
        raise InvalidInput("Problem names must be unique")

    results = []
    for problem in gharqa_input.problems:
        calc_input = CalculationInput(
            estate_value=problem.estate_value,
            heirs=problem.heirs,
            currency=problem.currency,
            language=problem.language,
        )
        result = calculate_inheritance(calc_input)
        logger.debug("gharqa problem %s: status=%s", problem.problem_name, result.status)
        results.append(GharqaResult(problem_name=problem.problem_name, result=result))

    return results
