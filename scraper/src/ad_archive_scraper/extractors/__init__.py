"""Per-field extractors, each an ordered chain of named strategies."""

from __future__ import annotations

from .adcopy import AD_TEXT_CHAIN, extract_ad_text
from .advertiser import (
    ADVERTISER_NAME_CHAIN,
    LIBRARY_ID_CHAIN,
    SPONSORED_CHAIN,
    extract_advertiser_name,
    extract_is_sponsored,
    extract_library_id,
)
from .creative import CREATIVE_CHAIN, extract_creative
from .cta import CTA_TEXT_CHAIN, CTA_URL_CHAIN, extract_cta_text, extract_cta_url

# Field name -> extractor. Extractors are independent of one another; the
# order only fixes the order of provenance entries in the output.
FIELD_EXTRACTORS = {
    "creative": extract_creative,
    "cta_url": extract_cta_url,
    "cta_text": extract_cta_text,
    "advertiser_name": extract_advertiser_name,
    "library_id": extract_library_id,
    "is_sponsored": extract_is_sponsored,
    "ad_text": extract_ad_text,
}

__all__ = [
    "AD_TEXT_CHAIN",
    "ADVERTISER_NAME_CHAIN",
    "CREATIVE_CHAIN",
    "CTA_TEXT_CHAIN",
    "CTA_URL_CHAIN",
    "FIELD_EXTRACTORS",
    "LIBRARY_ID_CHAIN",
    "SPONSORED_CHAIN",
    "extract_ad_text",
    "extract_advertiser_name",
    "extract_creative",
    "extract_cta_text",
    "extract_cta_url",
    "extract_is_sponsored",
    "extract_library_id",
]
