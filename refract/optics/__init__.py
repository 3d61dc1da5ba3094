"""
Optics: Lens, Prism, Optional, Traversal and Iso, their composition,
bulk traversal operations, indexed variants and ready-made optics.
"""

from .base import Optic, Lens, Prism, Optional, Traversal, Iso
from .base import lens, prism, optional, traversal, iso
from .compose import (
    COMPOSITION_TABLE,
    composition_kind,
    compose,
    chain,
    compose_lens_lens,
    compose_lens_prism,
    compose_lens_optional,
    compose_prism_lens,
    compose_prism_prism,
    compose_prism_optional,
    compose_optional_lens,
    compose_optional_prism,
    compose_optional_optional,
    compose_with_traversal,
    compose_iso_iso,
    compose_iso_prism,
    compose_prism_iso,
)
from .traversal_ops import (
    filter_traversal,
    take_traversal,
    drop_traversal,
    slice_traversal,
    reverse_traversal,
    sort_by_traversal,
    distinct_traversal,
    reduce_traversal,
    fold_map_traversal,
    all_traversal,
    any_traversal,
    count_traversal,
    find_traversal,
    head_traversal,
    last_traversal,
    collect_traversal,
    is_empty_traversal,
    set_all_traversal,
)
from .indexed import (
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
from .enhanced import EnhancedOptional, enhanced
from .builtins import (
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
from .laws import (
    LawReport,
    check_lens_laws,
    check_prism_laws,
    check_iso_laws,
    check_traversal_laws,
    check_monoid_laws,
    assert_laws,
)
