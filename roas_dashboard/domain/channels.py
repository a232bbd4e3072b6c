"""Ad channel catalogue: display labels, badges and creative API support."""

from __future__ import annotations

import enum
from typing import Any


class ChannelType(str, enum.Enum):
    INSTAGRAM = "instagram"
    NAVER_BLOG = "naver_blog"
    META = "meta"
    GOOGLE = "google"
    GOOGLE_ADS = "google_ads"
    NAVER_SEARCH = "naver_search"
    NAVER_GFA = "naver_gfa"
    KAKAO = "kakao"
    KARROT = "karrot"
    TOSS = "toss"
    DABLE = "dable"
    INFLUENCER = "influencer"
    EXPERIENCE = "experience"
    BLOG = "blog"
    CAFE = "cafe"
    EMAIL = "email"
    SMS = "sms"
    OFFLINE = "offline"
    ETC = "etc"
    UNKNOWN = "unknown"

    @classmethod
    def from_value(cls, value: Any) -> "ChannelType":
        if isinstance(value, cls):
            return value
        text = str(value or "").strip().lower()
        try:
            return cls(text)
        except ValueError:
            return cls.UNKNOWN

    @property
    def label(self) -> str:
        return CHANNEL_LABELS[self]

    @property
    def badge(self) -> str:
        return CHANNEL_BADGES.get(self, self.label)

    @property
    def has_creative_api(self) -> bool:
        return self in CREATIVE_API_CHANNELS


CHANNEL_LABELS: dict[ChannelType, str] = {
    ChannelType.INSTAGRAM: "인스타그램",
    ChannelType.NAVER_BLOG: "네이버 블로그",
    ChannelType.META: "Meta 광고",
    ChannelType.GOOGLE: "Google Ads",
    ChannelType.GOOGLE_ADS: "Google Ads",
    ChannelType.NAVER_SEARCH: "네이버 검색광고",
    ChannelType.NAVER_GFA: "네이버 GFA",
    ChannelType.KAKAO: "카카오모먼트",
    ChannelType.KARROT: "당근 비즈니스",
    ChannelType.TOSS: "토스",
    ChannelType.DABLE: "데이블",
    ChannelType.INFLUENCER: "인플루언서",
    ChannelType.EXPERIENCE: "체험단",
    ChannelType.BLOG: "블로그",
    ChannelType.CAFE: "카페/커뮤니티",
    ChannelType.EMAIL: "이메일/뉴스레터",
    ChannelType.SMS: "SMS",
    ChannelType.OFFLINE: "오프라인 광고",
    ChannelType.ETC: "기타",
    ChannelType.UNKNOWN: "알 수 없음",
}

# Short badge text; channels without one fall back to the full label.
CHANNEL_BADGES: dict[ChannelType, str] = {
    ChannelType.NAVER_SEARCH: "SA",
    ChannelType.NAVER_GFA: "GFA",
    ChannelType.META: "Meta",
    ChannelType.GOOGLE: "Google",
    ChannelType.GOOGLE_ADS: "Google",
    ChannelType.KAKAO: "Kakao",
    ChannelType.INSTAGRAM: "Instagram",
    ChannelType.NAVER_BLOG: "블로그",
}

CREATIVE_API_CHANNELS: frozenset[ChannelType] = frozenset({ChannelType.META})


def channel_label(value: Any) -> str:
    return ChannelType.from_value(value).label
