"""Illustration catalog."""
from typing import Dict, List, Type

from widgets.illustration_view import IllustrationView

from .kfold_validation import KFoldValidationView
from .mnist_network import MNISTNetworkView
from .training_loop import TrainingLoopView

ILLUSTRATIONS: Dict[str, Type[IllustrationView]] = {
    view.NAME: view
    for view in (KFoldValidationView, MNISTNetworkView, TrainingLoopView)
}


def list_illustrations() -> List[str]:
    """Catalog names in display order."""
    return sorted(ILLUSTRATIONS)


def get_illustration(name: str) -> Type[IllustrationView]:
    """
    Look up an illustration class by catalog name.

    Raises:
        KeyError: if no illustration has that name
    """
    try:
        return ILLUSTRATIONS[name]
    except KeyError:
        raise KeyError(
            f"Unknown illustration {name!r}; available: {', '.join(list_illustrations())}"
        ) from None


__all__ = [
    'ILLUSTRATIONS',
    'KFoldValidationView',
    'MNISTNetworkView',
    'TrainingLoopView',
    'get_illustration',
    'list_illustrations',
]
