# -*- coding: utf-8 -*-

"""
cleaner.py — cleaning pipeline for property seed CSVs

- Headers normalized to the property columns (imageUrl -> image_url).
- Prices parsed to exact Decimals (2 places); letters, junk, negatives and
  values beyond NUMERIC(12, 2) become missing.
- Rows without title/location/price are dropped.
- Descriptions capped at 1000 characters.
- Modular steps with timing/logging + fail-fast.
"""

import logging
import re
import time
from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Iterable, List, Optional, Protocol, Tuple

import pandas as pd

LOG = logging.getLogger("cleaner")

# =========================
# Decorators
# =========================

def timeit(step_name: str):
    def deco(func):
        def wrapper(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
            t0 = time.perf_counter()
            out = func(self, df, ctx)
            ms = (time.perf_counter() - t0) * 1000
            LOG.debug("%s took %.2f ms", step_name, ms)
            return out
        return wrapper
    return deco

def log_step(step_name: str):
    def deco(func):
        def wrapper(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
            before = df.shape
            out = func(self, df, ctx)
            if out is None:
                raise ValueError(f"{self.__class__.__name__}.{func.__name__} (step='{step_name}') returned None; expected DataFrame.")
            after = out.shape
            ctx.setdefault("log", []).append(f"{step_name}: {before} -> {after}")
            return out
        return wrapper
    return deco

def safe_step(func):
    def wrapper(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
        try:
            return func(self, df, ctx)
        except Exception as e:
            ctx.setdefault("errors", []).append(f"{self.__class__.__name__}: {type(e).__name__}: {e}")
            raise
    return wrapper

def validate_columns(required: Iterable[str]):
    req = list(required)
    def deco(func):
        def wrapper(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
            missing = [c for c in req if c not in df.columns]
            if missing:
                raise ValueError(f"{self.__class__.__name__}: missing required columns: {missing}")
            return func(self, df, ctx)
        return wrapper
    return deco

# =========================
# Policy / Interfaces
# =========================

REQUIRED = ["title", "location", "price"]
PROPERTY_COLUMNS = ["title", "location", "price", "description", "image_url"]

@dataclass
class CleaningPolicy:
    max_description: int = 1000
    required: List[str] = field(default_factory=lambda: list(REQUIRED))
    # Inner whitespace collapsed for these
    collapse_whitespace: List[str] = field(default_factory=lambda: ["title", "location"])
    dedupe_on: List[str] = field(default_factory=lambda: ["title", "location", "price"])
    header_aliases: Dict[str, str] = field(default_factory=lambda: {"imageurl": "image_url"})

class CleanerStep(Protocol):
    name: str
    def apply(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame: ...

# =========================
# Helpers
# =========================

_PRICE_JUNK_RE = re.compile(r"[^0-9\.,\-]+")
_THOUSANDS_TAIL_RE = re.compile(r",\d{3}$")
_WS_RE = re.compile(r"\s+")
_CENTS = Decimal("0.01")
_PRICE_CEILING = Decimal(10) ** 10

def _blank_to_none(x: Any) -> Any:
    if x is None or (not isinstance(x, str) and pd.isna(x)):
        return None
    if isinstance(x, str):
        s = x.strip()
        return s or None
    return x

def classify_price(x: Any) -> Tuple[Optional[Decimal], Optional[str]]:
    """
    Returns (price, None) or (None, reason) with reason one of
    'letters', 'unparsable', 'negative', 'oversized'.
    """
    if x is None:
        return None, None
    if isinstance(x, Decimal):
        s = str(x)
    else:
        raw = str(x).strip()
        # '1.2M', 'call for price', 'USD 500'
        if any(ch.isalpha() for ch in raw):
            return None, "letters"
        s = _PRICE_JUNK_RE.sub("", raw)
    if s in ("", "-", ".", ","):
        return None, "unparsable"
    if "," in s and "." in s:
        s = s.replace(",", "")                     # drop thousands sep
    elif s.count(",") > 1 or _THOUSANDS_TAIL_RE.search(s):
        s = s.replace(",", "")                     # 1,250,000
    else:
        s = s.replace(",", ".")                    # accept comma decimal
    try:
        val = Decimal(s)
    except InvalidOperation:
        return None, "unparsable"
    if not val.is_finite():
        return None, "unparsable"
    if val < 0:
        return None, "negative"
    val = val.quantize(_CENTS)
    # NUMERIC(12, 2) holds at most 10 integer digits
    if val >= _PRICE_CEILING:
        return None, "oversized"
    return val, None

def parse_price(x: Any) -> Optional[Decimal]:
    """'$1,250,000' -> Decimal('1250000.00'); letters/junk/negative/oversized -> None."""
    return classify_price(x)[0]

# =========================
# Steps
# =========================

class NormalizeHeaders:
    name = "normalize_headers"

    def __init__(self, policy: CleaningPolicy):
        self.policy = policy

    @timeit(name)
    @log_step(name)
    @safe_step
    def apply(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
        df = df.copy()
        cols = [c.strip().lower() for c in df.columns]
        df.columns = [self.policy.header_aliases.get(c, c) for c in cols]
        for c in PROPERTY_COLUMNS:
            if c not in df.columns:
                df[c] = None
        return df[PROPERTY_COLUMNS]

class StripText:
    name = "strip_text"

    def __init__(self, policy: CleaningPolicy):
        self.policy = policy

    @timeit(name)
    @log_step(name)
    @safe_step
    def apply(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
        df = df.astype(object).copy()
        for c in df.columns:
            df[c] = df[c].map(_blank_to_none)
        for c in self.policy.collapse_whitespace:
            df[c] = df[c].map(lambda x: _WS_RE.sub(" ", x) if isinstance(x, str) else x)
        return df

class ParsePrice:
    name = "parse_price"

    @timeit(name)
    @log_step(name)
    @safe_step
    @validate_columns(["price"])
    def apply(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
        df = df.copy()
        results = df["price"].map(classify_price)
        reasons = results.map(lambda r: r[1]).dropna()
        if len(reasons):
            # e.g. {'letters': 2, 'oversized': 1}
            ctx.setdefault("details", {})[self.name] = {str(k): int(v) for k, v in reasons.value_counts().items()}
        df["price"] = results.map(lambda r: r[0]).astype(object)
        return df

class DropIncomplete:
    name = "drop_incomplete"

    def __init__(self, policy: CleaningPolicy):
        self.policy = policy

    @timeit(name)
    @log_step(name)
    @safe_step
    def apply(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
        out = df.dropna(subset=self.policy.required)
        dropped = len(df) - len(out)
        if dropped:
            ctx.setdefault("details", {})[self.name] = f"{dropped} rows missing {self.policy.required}"
        return out.reset_index(drop=True)

class TruncateDescription:
    name = "truncate_description"

    def __init__(self, policy: CleaningPolicy):
        self.policy = policy

    @timeit(name)
    @log_step(name)
    @safe_step
    @validate_columns(["description"])
    def apply(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
        df = df.copy()
        n = self.policy.max_description
        df["description"] = df["description"].map(lambda x: x[:n] if isinstance(x, str) else x)
        return df

class DedupeListings:
    name = "dedupe_listings"

    def __init__(self, policy: CleaningPolicy):
        self.policy = policy

    @timeit(name)
    @log_step(name)
    @safe_step
    def apply(self, df: pd.DataFrame, ctx: Dict[str, Any]) -> pd.DataFrame:
        return df.drop_duplicates(subset=self.policy.dedupe_on, keep="first").reset_index(drop=True)

# =========================
# Pipeline
# =========================

def build_default_steps(policy: CleaningPolicy) -> List[CleanerStep]:
    return [
        NormalizeHeaders(policy),
        StripText(policy),
        ParsePrice(),
        DropIncomplete(policy),
        TruncateDescription(policy),
        DedupeListings(policy),
    ]

def clean_properties(df: pd.DataFrame, policy: Optional[CleaningPolicy] = None) -> Tuple[pd.DataFrame, Dict[str, Any]]:
    """Run every cleaning step; returns the cleaned frame and the step context (log/details/errors)."""
    policy = policy or CleaningPolicy()
    ctx: Dict[str, Any] = {}
    for step in build_default_steps(policy):
        df = step.apply(df, ctx)
    for line in ctx.get("log", []):
        LOG.info(line)
    return df, ctx
