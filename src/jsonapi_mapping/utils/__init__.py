from .formatting import camelize, english_enumerate, pluralize  # noqa
from .typing import (  # noqa
    analyze_shape,
    assert_not_none,
    evaluate_annotation,
    is_class_var,
    own_annotations,
    unwrap_optional,
)
