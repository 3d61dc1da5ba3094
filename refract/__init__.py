"""
refract
=======
Composable optics for reading and immutably updating nested data:
- Lens, Prism, Optional, Traversal and Iso with a closed composition table
- Bulk traversal operations (filter, slice, sort, dedupe, fold)
- Indexed optics whose composed index is the pair of their indices
- Law checks for optics and monoids

Example:
    >>> from refract import key, each
    >>> users = key("users").then(each())
    >>> users.get_all({"users": [1, 2, 3]})
    [1, 2, 3]
"""

__version__ = "0.1.0"

from .core.types import OpticKind, identity, constant
from .core.maybe import Maybe, Present, Absent
from .errors import (
    RefractError,
    OpticError,
    OutOfBoundsError,
    KeyNotFoundError,
    CompositionError,
    LawViolationError,
    ConfigurationError,
)
from .categorical.monoid import (
    Monoid,
    monoid,
    SumMonoid,
    ProductMonoid,
    StringMonoid,
    ListMonoid,
    AnyMonoid,
    AllMonoid,
    MinMonoid,
    MaxMonoid,
)
from .optics.base import Optic, Lens, Prism, Optional, Traversal, Iso
from .optics.base import lens, prism, optional, traversal, iso
from .optics.compose import compose, chain, composition_kind, COMPOSITION_TABLE
from .optics.indexed import (
    IndexedLens,
    IndexedPrism,
    IndexedOptional,
    IndexedTraversal,
    indexed_lens,
    indexed_prism,
    indexed_optional,
    indexed_traversal,
    compose_indexed,
    sequence_index_lens,
    sequence_index_prism,
    sequence_index_traversal,
    dict_key_lens,
    dict_key_prism,
)
from .optics.enhanced import EnhancedOptional, enhanced
from .optics.builtins import (
    key,
    attr,
    index,
    head,
    last,
    nullable_key,
    nullable_attr,
    present,
    variant,
    instance_of,
    each,
    values,
    keys,
    ndarray_elements,
)
from .optics.laws import (
    LawReport,
    check_lens_laws,
    check_prism_laws,
    check_iso_laws,
    check_traversal_laws,
    check_monoid_laws,
    assert_laws,
)
from .config import Config, RefractSettings, apply_config, get_default_config
