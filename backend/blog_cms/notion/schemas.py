# backend/blog_cms/notion/schemas.py

"""
Notion から取得したデータを内部で扱うためのスキーマ定義。

- RichTextSpan: 装飾付きテキストの 1 区間
- *Block: ブロック種別ごとのモデル（必要なフィールドだけを持つ）
- UnsupportedBlock: 未対応 / 不正なブロックの受け皿（種別名だけ保持）
- NotionImportRequest / NotionImportResponse: /notion/import の入出力
"""

import logging
from typing import Any, Callable, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class RichTextAnnotations(BaseModel):
    """リッチテキストの装飾フラグ。underline / color は Markdown 化しないので持たない。"""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False

    @field_validator("bold", "italic", "strikethrough", "code", mode="before")
    @classmethod
    def _null_as_false(cls, value: Any) -> Any:
        return False if value is None else value


class RichTextSpan(BaseModel):
    """
    Notion の rich_text 配列の 1 要素。

    null で届いた値は既定値として扱い、テキストを落とさない。
    """

    plain_text: str = ""
    annotations: RichTextAnnotations = Field(default_factory=RichTextAnnotations)
    href: Optional[str] = None

    @field_validator("plain_text", mode="before")
    @classmethod
    def _null_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("annotations", mode="before")
    @classmethod
    def _null_as_no_annotations(cls, value: Any) -> Any:
        return {} if value is None else value

    @field_validator("href", mode="before")
    @classmethod
    def _empty_href_as_none(cls, value: Any) -> Any:
        return value or None


class ParagraphBlock(BaseModel):
    type: Literal["paragraph"] = "paragraph"
    rich_text: List[RichTextSpan] = Field(default_factory=list)


class HeadingBlock(BaseModel):
    type: Literal["heading_1", "heading_2", "heading_3"]
    rich_text: List[RichTextSpan] = Field(default_factory=list)

    @property
    def level(self) -> int:
        return int(self.type[-1])


class BulletedListItemBlock(BaseModel):
    type: Literal["bulleted_list_item"] = "bulleted_list_item"
    rich_text: List[RichTextSpan] = Field(default_factory=list)


class NumberedListItemBlock(BaseModel):
    type: Literal["numbered_list_item"] = "numbered_list_item"
    rich_text: List[RichTextSpan] = Field(default_factory=list)


class ToDoBlock(BaseModel):
    type: Literal["to_do"] = "to_do"
    rich_text: List[RichTextSpan] = Field(default_factory=list)
    checked: bool = False


class ToggleBlock(BaseModel):
    """子ブロックは描画しないので summary 用のテキストだけ持つ。"""

    type: Literal["toggle"] = "toggle"
    rich_text: List[RichTextSpan] = Field(default_factory=list)


class CodeBlock(BaseModel):
    type: Literal["code"] = "code"
    rich_text: List[RichTextSpan] = Field(default_factory=list)
    language: str = ""


class QuoteBlock(BaseModel):
    type: Literal["quote"] = "quote"
    rich_text: List[RichTextSpan] = Field(default_factory=list)


class CalloutBlock(BaseModel):
    type: Literal["callout"] = "callout"
    rich_text: List[RichTextSpan] = Field(default_factory=list)
    icon_emoji: Optional[str] = None


class DividerBlock(BaseModel):
    type: Literal["divider"] = "divider"


class ImageBlock(BaseModel):
    type: Literal["image"] = "image"
    url: str = ""
    caption: Optional[List[RichTextSpan]] = None


class BookmarkBlock(BaseModel):
    type: Literal["bookmark"] = "bookmark"
    url: str = ""
    caption: Optional[List[RichTextSpan]] = None


class LinkPreviewBlock(BaseModel):
    type: Literal["link_preview"] = "link_preview"
    url: str = ""


class StructuralBlock(BaseModel):
    """table / column_list / column。中身は子ブロック側にあるため何も描画しない。"""

    type: Literal["table", "column_list", "column"]


class UnsupportedBlock(BaseModel):
    """未対応のブロック種別。ログ出力用に種別名だけ保持する。"""

    type: str


Block = Union[
    ParagraphBlock,
    HeadingBlock,
    BulletedListItemBlock,
    NumberedListItemBlock,
    ToDoBlock,
    ToggleBlock,
    CodeBlock,
    QuoteBlock,
    CalloutBlock,
    DividerBlock,
    ImageBlock,
    BookmarkBlock,
    LinkPreviewBlock,
    StructuralBlock,
    UnsupportedBlock,
]


def parse_rich_text(raw: Any) -> List[RichTextSpan]:
    """
    rich_text 配列を RichTextSpan のリストに変換する。

    配列でなければ空リスト。dict でない要素や型が合わない要素はログを残して読み飛ばす。
    """
    if not isinstance(raw, list):
        return []

    spans: List[RichTextSpan] = []
    for item in raw:
        if not isinstance(item, dict):
            logger.warning("Skipping non-object rich text span: %r", item)
            continue
        try:
            spans.append(RichTextSpan.model_validate(item))
        except ValidationError as exc:
            logger.warning("Skipping malformed rich text span: %s", exc.errors())
    return spans


def _text_of(payload: Dict[str, Any]) -> List[RichTextSpan]:
    return parse_rich_text(payload.get("rich_text"))


def _caption_of(payload: Dict[str, Any]) -> Optional[List[RichTextSpan]]:
    """caption キーが無い / null なら None（空配列とは区別する）。"""
    caption = payload.get("caption")
    if caption is None:
        return None
    return parse_rich_text(caption)


def _hosted_url(payload: Dict[str, Any]) -> str:
    """Notion ホストのファイルを優先し、無ければ外部 URL。"""
    for key in ("file", "external"):
        source = payload.get(key)
        if isinstance(source, dict) and source.get("url"):
            return source["url"]
    return ""


def _callout_emoji(payload: Dict[str, Any]) -> Optional[str]:
    icon = payload.get("icon")
    if isinstance(icon, dict):
        return icon.get("emoji") or None
    return None


_BlockParser = Callable[[str, Dict[str, Any]], Block]

_BLOCK_PARSERS: Dict[str, _BlockParser] = {
    "paragraph": lambda t, p: ParagraphBlock(rich_text=_text_of(p)),
    "heading_1": lambda t, p: HeadingBlock(type=t, rich_text=_text_of(p)),
    "heading_2": lambda t, p: HeadingBlock(type=t, rich_text=_text_of(p)),
    "heading_3": lambda t, p: HeadingBlock(type=t, rich_text=_text_of(p)),
    "bulleted_list_item": lambda t, p: BulletedListItemBlock(rich_text=_text_of(p)),
    "numbered_list_item": lambda t, p: NumberedListItemBlock(rich_text=_text_of(p)),
    "to_do": lambda t, p: ToDoBlock(rich_text=_text_of(p), checked=bool(p.get("checked"))),
    "toggle": lambda t, p: ToggleBlock(rich_text=_text_of(p)),
    "code": lambda t, p: CodeBlock(rich_text=_text_of(p), language=p.get("language") or ""),
    "quote": lambda t, p: QuoteBlock(rich_text=_text_of(p)),
    "callout": lambda t, p: CalloutBlock(rich_text=_text_of(p), icon_emoji=_callout_emoji(p)),
    "divider": lambda t, p: DividerBlock(),
    "image": lambda t, p: ImageBlock(
        url=_hosted_url(p), caption=_caption_of(p)
    ),
    "bookmark": lambda t, p: BookmarkBlock(
        url=p.get("url") or "", caption=_caption_of(p)
    ),
    "link_preview": lambda t, p: LinkPreviewBlock(url=p.get("url") or ""),
    "table": lambda t, p: StructuralBlock(type=t),
    "column_list": lambda t, p: StructuralBlock(type=t),
    "column": lambda t, p: StructuralBlock(type=t),
}


def parse_block(raw: Any) -> Block:
    """
    Notion API の生のブロックオブジェクトを Block モデルに変換する。

    - 種別ごとのペイロードは raw[raw["type"]] に入っている
    - 未対応の種別・ペイロード欠落・不正な値は UnsupportedBlock にフォールバックする
      （パイプライン全体は止めない）
    """
    if not isinstance(raw, dict):
        return UnsupportedBlock(type="unknown")

    block_type = raw.get("type")
    if not isinstance(block_type, str) or not block_type:
        return UnsupportedBlock(type="unknown")

    parser = _BLOCK_PARSERS.get(block_type)
    payload = raw.get(block_type)
    if parser is None or not isinstance(payload, dict):
        return UnsupportedBlock(type=block_type)

    try:
        return parser(block_type, payload)
    except ValidationError as exc:
        logger.warning(
            "Malformed %s block id=%s: %s",
            block_type,
            raw.get("id", "unknown"),
            exc.errors(),
        )
        return UnsupportedBlock(type=block_type)


class NotionImportRequest(BaseModel):
    """
    /notion/import のリクエストボディ。

    url 未指定でも 422 ではなくサービス層で 400 を返すため Optional にしている。
    """

    url: Optional[str] = Field(None, description="インポート対象の Notion ページ URL")


class NotionImportResponse(BaseModel):
    """
    /notion/import のレスポンス。エディタのタイトル・本文欄にそのまま入る。
    """

    title: str = Field(..., description="ページタイトル（取得できない場合は既定値）")
    content: str = Field(..., description="Markdown に変換したページ本文")
