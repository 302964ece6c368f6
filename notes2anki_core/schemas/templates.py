"""Note template definitions created in the card store."""

from pydantic import BaseModel, ConfigDict, Field

from notes2anki_core.schemas.cards import MODEL_NAMES, CardType

CARD_CSS = """
.card {
    font-family: arial;
    font-size: 20px;
    text-align: center;
}
pre code {
  background-color: #eee;
  border: 2px solid #ddd;
  display: block;
  padding: 20px 30px;
}
.nightMode pre code {
  background-color: #333;
  border: 1px solid #333;
}
"""


class CardTemplate(BaseModel):
    """One card face pair inside a note model."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., alias="Name")
    front: str = Field(..., alias="Front")
    back: str = Field(..., alias="Back")


class NoteModel(BaseModel):
    """A note type (fields plus card templates) in the store."""

    model_config = ConfigDict(protected_namespaces=())

    model_name: str
    in_order_fields: list[str]
    card_templates: list[CardTemplate]
    css: str = CARD_CSS
    is_cloze: bool = False

    def to_payload(self) -> dict:
        """Render as a ``createModel`` request body."""
        return {
            "modelName": self.model_name,
            "inOrderFields": list(self.in_order_fields),
            "css": self.css,
            "isCloze": self.is_cloze,
            "cardTemplates": [
                template.model_dump(by_alias=True) for template in self.card_templates
            ],
        }


BASIC_MODEL = NoteModel(
    model_name=MODEL_NAMES[CardType.BASIC],
    in_order_fields=["Front", "Back", "Source"],
    card_templates=[
        CardTemplate(
            name="Card 1",
            front="{{Front}}",
            back="{{Front}}<hr id=answer>{{Back}}<br>{{Source}}",
        )
    ],
)

REVERSED_MODEL = NoteModel(
    model_name=MODEL_NAMES[CardType.REVERSED],
    in_order_fields=["Front", "Back", "Source"],
    card_templates=[
        CardTemplate(
            name="Card 1",
            front="{{Front}}",
            back="{{Front}}<hr id=answer>{{Back}}<br>{{Source}}",
        ),
        CardTemplate(
            name="Card 2",
            front="{{Back}}",
            back="{{Back}}<hr id=answer>{{Front}}<br>{{Source}}",
        ),
    ],
)

CLOZE_MODEL = NoteModel(
    model_name=MODEL_NAMES[CardType.CLOZE],
    in_order_fields=["Text", "Back Extra", "Source"],
    card_templates=[
        CardTemplate(
            name="Cloze",
            front="{{cloze:Text}}",
            back="{{cloze:Text}}<br>{{Back Extra}}<br>{{Source}}",
        )
    ],
    is_cloze=True,
)

DEFAULT_MODELS: tuple[NoteModel, ...] = (BASIC_MODEL, REVERSED_MODEL, CLOZE_MODEL)
