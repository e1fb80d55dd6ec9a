from __future__ import annotations


PERMALINK_MARKERS = ("/_redirect/pl/", "/pl/")


def get_post_id_from_link(ref: str) -> str:
    """퍼머링크(``.../pl/<postID>``, ``.../_redirect/pl/<postID>``)에서 post_id 를 꺼낸다.

    퍼머링크가 아니면 공백만 제거한 원래 값을 post_id 로 본다.
    """

    value = ref.strip()
    for marker in PERMALINK_MARKERS:
        if marker in value:
            tail = value.rsplit(marker, 1)[1]
            for sep in ("?", "#"):
                tail = tail.split(sep, 1)[0]
            return tail.strip("/")
    return value


def build_permalink(post_id: str, site_url: str = "") -> str:
    if not site_url:
        return post_id
    return f"{site_url.rstrip('/')}/_redirect/pl/{post_id}"
