"""Site and locale knowledge used by the extraction heuristics.

Everything in here is data: selector lists, label sets and ordered regex
rule tables.  New board quirks should be added to these tables rather than
as new branches in the extractor modules.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Pattern, Tuple


@dataclass(frozen=True)
class SanitizeRule:
    """A single ``pattern -> replacement`` step of the text sanitiser."""

    name: str
    pattern: Pattern[str]
    replacement: str = ""

    def apply(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, pattern: str, flags: int = 0, replacement: str = "") -> SanitizeRule:
    return SanitizeRule(name, re.compile(pattern, flags), replacement)


# ---------------------------------------------------------------------------
# Fetching: pages that only render with JavaScript
# ---------------------------------------------------------------------------

SPA_SHELL_MARKERS = re.compile(
    r"<div[^>]+id=[\"'](?:root|app|__next)[\"']"
    r"|window\.__(?:NEXT_DATA|NUXT)__"
    r"|ng-version="
    r"|data-reactroot",
    re.IGNORECASE,
)
SCRIPT_OR_STYLE_BLOCK = re.compile(r"<(script|style)\b[^>]*>.*?</\1>", re.IGNORECASE | re.DOTALL)
ANY_TAG = re.compile(r"<[^>]+>")
# A page this large with this little visible text is treated as a JS shell.
SPA_MIN_HTML_CHARS = 2000
SPA_MAX_VISIBLE_CHARS = 200


# ---------------------------------------------------------------------------
# Listing pages
# ---------------------------------------------------------------------------

ROW_SELECTOR = "tr, li, div.list-item, div.cont_box, dl"
NARROW_ROW_TAGS = frozenset({"dl", "dd", "dt"})
NARROW_ROW_CLASS = "cont_box"

TITLE_CANDIDATE_SELECTOR = (
    "dt, .subject, .title, strong, h4, h5, dd, .tit, .txt, .bo_tit, b, span"
)

# Pure punctuation, metadata labels, share buttons, author names and badges.
GARBAGE_TITLE = re.compile(
    r"^([-.\s]+|작성날짜|작성자|조회수|공유|페이스북|트위터|카카오스토리|네이버밴드"
    r"|오규태|오태규|새로운글|새글|\d{4}[-.]\d{2}[-.]\d{2})$"
)
PUNCTUATION_ONLY = re.compile(r"^[-.\s]+$")
METADATA_LABELS: Tuple[str, ...] = ("작성날짜", "작성자")

# Stripped from a row's full text by the last-resort title recovery.
ROW_METADATA_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"작성날짜\s*[\d\-.]+"),
    re.compile(r"작성자\s*\S+"),
    re.compile(r"조회수\s*\d+"),
    re.compile(r"(공유|페이스북|트위터|카카오스토리|네이버밴드|새로운글|새글)"),
)

# ---------------------------------------------------------------------------
# Pagination
# ---------------------------------------------------------------------------

PAGER_SELECTOR = ".pagination, .paging, .pages, .page-list"
CURRENT_PAGE_SELECTOR = "strong, .on, .active, .current"
NEXT_BUTTON_SELECTOR = "a.next, a.btn_next, a.btn-next"
NEXT_TEXT_MARKERS: Tuple[str, ...] = ("다음", "Next", ">")
PAGE_QUERY_KEYS: Tuple[str, ...] = ("pageIndex", "page")

# ---------------------------------------------------------------------------
# Detail pages: content
# ---------------------------------------------------------------------------

CONTENT_CONTAINER_SELECTOR = ", ".join([
    ".bv_cont", ".bv_contents", ".bbs_view01", "#bo_v_con", ".view-content",
    ".post_content", "article", ".content", "#content", ".view_cont",
    ".bbs_view", ".p-table__content", ".db_data", ".view_contents",
    ".txt-area", ".board_view_con", ".con-area", ".view_text",
    ".bbs_content", ".board-text", ".board_view", ".open_inner",
])

MENU_MARKERS = re.compile(r"모바일메뉴|통합검색|로그인|회원가입|사이트맵|Language|패밀리사이트|관련사이트")
MENU_DOMINATED_LENGTH = 500
MIN_CONTAINER_LENGTH = 50

# Removed from the cloned container, in this order.
NOISE_SELECTORS: Tuple[str, ...] = (
    "script, style, noscript, iframe, button, input, select, textarea, form",
    "header, footer, nav, aside, menu, dialog",
    ".gnb, .lnb, .snb, .tnb, .header, .footer, .sidebar, .aside, .menu, "
    ".top-menu, .left-menu, .right-menu",
    ".breadcrumb, .location, .path, .navi, .pg-nav, .page-navi",
    ".search, .search_area, .search-box, .sch, .srch, .util, .utility",
    ".btn_area, .board-btm, .list_btn, .file_area, .view_file, .bo_v_file, .view_link",
    ".view_info, .bo_v_info, .sub_info, .info_area, .writer, .date, .hit, .ip, "
    ".view-info, .board-info",
    ".bo_v_sns, .sns_area, .share_area, .bo_v_com, .bo_v_nb, .prev-next, .page-move",
    ".kogl, .copyright, .license, .signature, .profile, .admin, .ctt_admin",
    ".img_desc, .caption",
    ".blind, .screen_out, .skip, .sr-only, .accessibility, .hidden, .hide",
)

ATTACHMENT_ROW_SELECTOR = "tr, li, div, p, dt, dd"
ATTACHMENT_ROW_PREFIXES: Tuple[str, ...] = ("첨부파일", "첨부", "Attachment")
ATTACHMENT_ROW_EXACT = "파일"

BLOCK_SELECTOR = "p, div, tr, li"

# ---------------------------------------------------------------------------
# Detail pages: text sanitiser
# ---------------------------------------------------------------------------

SCRIPT_RESIDUE_RULES: Tuple[SanitizeRule, ...] = (
    _rule("jquery-ready", r"\$\(function\(\)\s*\{[\s\S]*?\}\);\s*}\);?"),
    _rule("var-assignment", r"var\s+\w+\s*=\s*[\s\S]*?;"),
    _rule("window-assignment", r"window\.\w+\s*=\s*[\s\S]*?;"),
    _rule("console-log", r"console\.log\([\s\S]*?\);?"),
    _rule("bare-function-body", r"[a-zA-Z_$][0-9a-zA-Z_$]*\s*\([^)]*\)\s*\{[\s\S]*?\}"),
    _rule("function-block", r"function\s*\w*\s*\(.*?\)\s*\{[\s\S]*?\}"),
    _rule("document-write", r"document\.write\(.*?\);?"),
    _rule("alert", r"alert\(.*?\);?"),
    _rule("zoom-label", r"사진 확대보기"),
    _rule("cdata", r"//<!\[CDATA\[[\s\S]*?//\]\]>"),
)

BOILERPLATE_RULES: Tuple[SanitizeRule, ...] = (
    _rule("a11y-summary", r"새소식 상세보기[\s\S]*?정보 제공"),
    _rule("survey-block", r"콘텐츠 만족도 조사[\s\S]*?(확인|등록|평가)"),
    _rule("survey-footer", r"이 페이지에서 제공하는 정보에 대하여[\s\S]*\Z"),
    _rule("survey-tail", r"만족도 조사[\s\S]*\Z"),
    _rule("egov-banner", r"이 누리집은 대한민국 공식 전자정부 누리집입니다.*$", re.M),
    _rule("breadcrumb", r"열린시정[\s\S]*?공지사항"),
    _rule("display-options", r"표시옵션열기[\s\S]*?닫기"),
    _rule("share-widget", r"공유하기열기[\s\S]*?닫기"),
    _rule("print-widget", r"출력 및 다운로드열기[\s\S]*?닫기"),
    _rule("qr-widget", r"QR코드열기[\s\S]*?닫기"),
    _rule("favorite-widget", r"즐겨찾기열기[\s\S]*?닫기"),
    _rule("manager-info", r"담당자 정보[\s\S]*\Z"),
    _rule("department-info", r"담당부서 :[\s\S]*최종수정일.*\Z"),
    _rule("modified-date", r"최종수정일\s*[\d.]+"),
    _rule("view-count", r"조회수\s*\d+"),
    _rule("written-date", r"작성일\s*[\d.]+"),
    _rule("list-navigation", r"목록[\s\S]*?다음글[\s\S]*\Z"),
    _rule("kogl-license", r'본 저작물은 "공공누리"[\s\S]*?이용 할 수 있습니다.'),
    _rule("satisfaction-question", r"이 페이지에서 제공하는 정보에 만족하십니까[\s\S]*\Z"),
    _rule("top-button", r"TOP\Z"),
    _rule("breadcrumb-line", r"^열린시정.*$", re.M),
    # MFDS (식약처) portal chrome
    _rule("mfds-mobile-menu", r"모바일메뉴[\s\S]*?통합검색"),
    _rule("mfds-sns", r"블로그\s*페이스북\s*트위터\s*인스타그램\s*유투브\s*카카오채널"),
    _rule("mfds-home", r"홈으로[\s\S]*?대전지방청"),
    _rule("mfds-utility", r"English\s*전자우편구독\s*이용안내"),
    _rule("mfds-data-portal", r"식의약 데이터 누리집"),
    _rule("mfds-regional", r"지방식약청[\s\S]*?대전청"),
    _rule("mfds-disclosure", r"정보공개[\s\S]*?사전정보 공개"),
    _rule("mfds-survey-block", r"현재 페이지의 내용에 만족하십니까[\s\S]*?(\(\d+건\)\s*)+"),
    _rule("mfds-survey-line", r"현재 페이지의 내용에 만족하십니까\?"),
)

WHITESPACE_RULES: Tuple[SanitizeRule, ...] = (
    _rule("empty-lines", r"^\s*[\r\n]", re.M),
    _rule("newline-runs", r"\n{3,}", replacement="\n\n"),
)

SANITIZE_RULES: Tuple[SanitizeRule, ...] = (
    SCRIPT_RESIDUE_RULES + BOILERPLATE_RULES + WHITESPACE_RULES
)

# ---------------------------------------------------------------------------
# Detail pages: media
# ---------------------------------------------------------------------------

IMAGE_SELECTOR = ", ".join([
    ".slide_img img", ".bv_cont img", "#bo_v_con img", ".view-content img",
    "article img", ".view_cont img", ".bbs_view img", ".p-table__content img",
    ".view_contents img", ".txt-area img", ".board_view_con img",
    ".con-area img", ".view_text img", ".bbs_content img", ".board-text img",
    ".board_view img", "#content img", ".open_inner img", ".file_viewbox img",
])

JUNK_IMAGE_KEYWORDS: Tuple[str, ...] = (
    "logo", "icon", "btn", "mark", "banner", "opentype", "qr", "screen_qr", "common",
)

FILE_AREA_SELECTOR = ", ".join([
    ".file_area a", ".view_file a", ".bo_v_file a", "a.view_file_download",
    "ul.file-list a", ".add-file a", ".attach-file a",
    ".bbs_file_cont a", ".bv_file_box a",
])

FILE_NOISE_LABELS: Tuple[str, ...] = (
    "미리보기", "Preview", "바로보기", "바로듣기",
    "이미지 다운로드", "파일 다운로드", "사진 확대보기",
)
FILE_NOISE_CLASS = "view-direct"
FILE_NOISE_HREF_MARKERS: Tuple[str, ...] = ("preImageFromDoc.do",)

GENERIC_FILE_NAMES = frozenset({"Download", "다운로드", "파일", "다운받기"})
GENERIC_NAME_WORDS = re.compile(r"다운로드|파일|받기")
FILE_NAME_PARENT_NOISE = "a, button, span.btn, span.label"
DEFAULT_FILE_NAME = "Attached File"

FILE_EXTENSIONS: Tuple[str, ...] = (
    ".pdf", ".xlsx", ".xls", ".doc", ".docx",
    ".hwp", ".hwpx", ".ppt", ".pptx", ".zip",
    ".txt", ".csv", ".jpg", ".png", ".jpeg",
)

ATTACHMENT_LABEL = "첨부파일"
ATTACHMENT_LABEL_SELECTOR = "th, dt, .label, strong, b, span"
ATTACHMENT_VALUE_TAGS = frozenset({"td", "dd", "div"})
ATTACHMENT_VALUE_SELECTOR = "td, dd, div"

IMAGE_FILE_URL = re.compile(r"\.(jpg|jpeg|png|gif|webp|bmp)(\?|$)")
ID_SIGNATURE = re.compile(r"(idx|fileno|file_cn)=([0-9]+)")
