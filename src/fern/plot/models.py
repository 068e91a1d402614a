"""The plot aggregate: plot identity plus one form of each kind."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import (
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

from ..codec import format_decimal
from ..exceptions import FormKindMismatchError, MalformedInfoError, PlotCompositionError
from ..forms import (
    CodecOptions,
    Form,
    FormEnvelope,
    FormKind,
    FormMetadata,
    Location,
    decode_form,
    encode_form,
    parse_location,
)
from ..forms.envelope import info_lines
from ..forms.schema import DEFAULT_OPTIONS


PLOT_INFO_LINES = 2
DEFAULT_LOCATION = Location(latitude=44.365658, longitude=-69.793207)
DEFAULT_PLOT_ID_FORMAT = "Plot %d.%m.%Y"

EnvelopeInput = Union[FormEnvelope, Tuple[str, str]]


@dataclass
class Plot:
    plot_id: str
    location: Location
    forms: Dict[FormKind, Form] = field(default_factory=dict)

    def __post_init__(self) -> None:
        for kind, form in self.forms.items():
            if form.kind is not kind:
                raise PlotCompositionError(
                    f"form stored under {kind.display_name} is a {form.kind.display_name} form"
                )
        missing = [kind.display_name for kind in FormKind if kind not in self.forms]
        if missing:
            raise PlotCompositionError(f"plot is missing forms: {', '.join(missing)}")
        self.forms = {kind: self.forms[kind] for kind in FormKind.ordered()}

    @classmethod
    def new(
        cls,
        plot_id: Optional[str] = None,
        location: Optional[Location] = None,
        *,
        steward: str = "",
        on: Optional[date] = None,
        plot_id_format: str = DEFAULT_PLOT_ID_FORMAT,
    ) -> "Plot":
        """Create an empty plot; every form starts at the plot location."""

        on = on or date.today()
        location = location or DEFAULT_LOCATION
        if plot_id is None:
            plot_id = on.strftime(plot_id_format)
        metadata = FormMetadata(steward=steward, date=on, location=location)
        forms = {kind: Form.empty(kind, metadata) for kind in FormKind.ordered()}
        return cls(plot_id=plot_id, location=location, forms=forms)

    @classmethod
    def from_forms(
        cls, forms: Iterable[Form], plot_id: str, location: Location
    ) -> "Plot":
        by_kind: Dict[FormKind, Form] = {}
        for form in forms:
            if form.kind in by_kind:
                raise PlotCompositionError(
                    f"duplicate {form.kind.display_name} form"
                )
            by_kind[form.kind] = form
        return cls(plot_id=plot_id, location=location, forms=by_kind)

    def form(self, kind: FormKind) -> Form:
        return self.forms[kind]

    def __getitem__(self, kind: FormKind) -> Form:
        return self.forms[kind]

    def __iter__(self) -> Iterator[Form]:
        return iter(self.forms.values())

    def record_counts(self) -> Dict[FormKind, int]:
        return {kind: len(form) for kind, form in self.forms.items()}

    @property
    def folder_name(self) -> str:
        return self.plot_id.strip()


def encode_plot_info(plot: Plot) -> str:
    location = plot.location
    return "\n".join(
        [
            plot.plot_id,
            f"{format_decimal(location.latitude)},{format_decimal(location.longitude)}",
        ]
    )


def encode_plot(plot: Plot) -> Tuple[str, Dict[FormKind, FormEnvelope]]:
    envelopes = {kind: encode_form(form) for kind, form in plot.forms.items()}
    return encode_plot_info(plot), envelopes


def decode_plot(
    info: str,
    envelopes: Union[Mapping[FormKind, EnvelopeInput], Sequence[EnvelopeInput]],
    *,
    options: CodecOptions = DEFAULT_OPTIONS,
) -> Plot:
    """Rebuild a plot from its Info.txt and one (content, info) pair per form.

    When *envelopes* is keyed by kind, each form must decode to its key's
    kind. Any form that fails to decode fails the whole plot.
    """

    forms: List[Form] = []
    if isinstance(envelopes, Mapping):
        for kind, (content, form_info) in envelopes.items():
            form = decode_form(content, form_info, options=options)
            if form.kind is not kind:
                raise FormKindMismatchError(
                    expected=kind.display_name, found=form.kind.display_name
                )
            forms.append(form)
    else:
        for content, form_info in envelopes:
            forms.append(decode_form(content, form_info, options=options))

    lines = info_lines(info)
    if len(lines) != PLOT_INFO_LINES:
        raise MalformedInfoError(PLOT_INFO_LINES, len(lines))
    plot_id, location_line = lines
    location = parse_location(location_line)

    return Plot.from_forms(forms, plot_id=plot_id, location=location)
