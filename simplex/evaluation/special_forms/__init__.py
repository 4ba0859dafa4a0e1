"""Registry of special forms for the Simplex evaluator.

Maps head identifiers to handler functions that implement non-standard
evaluation rules. The evaluator consults this table before ordinary function
application. Each handler receives the evaluator, the call node and the
parameter nodes of the call.
"""

from simplex.evaluation.special_forms.lambda_form import lambda_form
from simplex.evaluation.special_forms.let_form import let_form
from simplex.evaluation.special_forms.if_form import if_form
from simplex.evaluation.special_forms.cond_form import cond_form

SPECIAL_FORMS = {
    "lambda": lambda_form,
    "let": let_form,
    "if": if_form,
    "cond": cond_form,
}
