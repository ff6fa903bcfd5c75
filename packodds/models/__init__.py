from packodds.models.booster import (
    BoosterConfig,
    OddsRecord,
    PackProduct,
    Sheet,
    TargetEntry,
    TargetSheet,
)
from packodds.models.card import CardPrint, PrintKey
from packodds.models.failure import (
    BoosterDataError,
    CardFetchError,
    FailureDetail,
    FailureKind,
    KnownError,
    unknown_failure,
)
from packodds.models.pack_result import BoosterOdds, PackResult, RankedCard
from packodds.models.wishlist import Wishlist, normalize_card_name

__all__ = [
    "BoosterConfig",
    "BoosterDataError",
    "BoosterOdds",
    "CardFetchError",
    "CardPrint",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "OddsRecord",
    "PackProduct",
    "PackResult",
    "PrintKey",
    "RankedCard",
    "Sheet",
    "TargetEntry",
    "TargetSheet",
    "Wishlist",
    "normalize_card_name",
    "unknown_failure",
]
