"""Main entry point for the Fretwise CLI."""

from typing import Optional

import click

from ..core.config import ConfigManager
from ..errors import FretwiseError
from ..fretboard import default_voicing, fret_window, positions_for
from ..identifier import confidence_label, filter_matches, identify_chords
from ..logger import get_logger
from ..logging_config import setup_logging
from ..note_types import ScaleKind
from ..notation import key_signature
from ..pitch import parse
from ..playback import frequency, playback_names
from ..scales import build_scale

logger = get_logger(__name__)

SCALE_KINDS = [kind.value for kind in ScaleKind]


class PitchParamType(click.ParamType):
    """Click parameter accepting compact pitch strings such as 'C#' or 'E2'."""

    name = "pitch"

    def convert(self, value, param, ctx):
        try:
            return parse(value)
        except FretwiseError as e:
            self.fail(str(e), param, ctx)


PITCH = PitchParamType()


def _format_notes(notes) -> str:
    return " ".join(n.name for n in notes)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Configuration directory (default: ~/.config/fretwise)",
)
@click.pass_context
def cli(ctx, debug, config_dir):
    """Fretwise - scales, chords and fretboard maps"""
    if debug:
        setup_logging("DEBUG")
    ctx.obj = ConfigManager(config_dir)
    logger.debug(f"Using configuration in {ctx.obj.config_dir}")


@cli.command()
@click.argument("root", type=PITCH)
@click.option("--kind", "-k", type=click.Choice(SCALE_KINDS), default="major", help="Scale kind")
def scale(root, kind):
    """Show a scale and its diatonic chords"""
    result = build_scale(root, kind)
    click.echo(f"{result.root.name} {result.kind.label}: {_format_notes(result.notes)}")

    signature = key_signature(result.root, result.kind)
    if signature is not None:
        click.echo(f"Key signature: {signature}")

    for title, chords in (("Triads", result.triads), ("Seventh chords", result.sevenths)):
        click.echo(f"\n{title}:")
        for chord in chords:
            click.echo(
                f"  {chord.roman_numeral:<8} {chord.display_name:<8} {_format_notes(chord.notes)}"
            )


@cli.command()
@click.argument("root", type=PITCH)
@click.option("--kind", "-k", type=click.Choice(SCALE_KINDS), default="major", help="Scale kind")
@click.option("--chord", "-c", "degree", type=click.IntRange(1, 7), default=None,
              help="Show the diatonic chord on this degree instead of the scale")
@click.option("--seventh", is_flag=True, help="Use the seventh chord on --chord's degree")
@click.option("--start", "-s", type=int, default=0, help="First fret of the window")
@click.option("--size", type=click.IntRange(min=1), default=None, help="Number of frets shown")
@click.option("--degrees", is_flag=True, help="Label members with degrees instead of names")
@click.option("--mute", "-m", type=click.IntRange(min=1), multiple=True,
              help="String number left out of the voicing (repeatable)")
@click.pass_obj
def fretboard(config, root, kind, degree, seventh, start, size, degrees, mute):
    """Map a scale or one of its chords onto the fretboard"""
    settings = config.get_config("fretboard")
    try:
        tuning = config.get_tuning()
    except FretwiseError as e:
        raise click.ClickException(f"Bad tuning in configuration: {e}")

    result = build_scale(root, kind)
    context = result
    if degree is not None:
        context = (result.sevenths if seventh else result.triads)[degree - 1]

    if size is None:
        size = settings["builder_window"] if degree is not None else settings["explorer_window"]
    fret_start, fret_end = fret_window(start, size, settings["max_fret"])
    positions = positions_for(context, fret_start, fret_end, tuning, settings["max_fret"])

    title = context.display_name if degree is not None else f"{result.root.name} {result.kind.label}"
    click.echo(f"{title} (frets {fret_start}-{fret_end})")
    header = "".join(f"{fret:^5}" for fret in range(fret_start, fret_end + 1))
    click.echo(f"     {header}")

    for string_number, open_pitch in enumerate(tuning, start=1):
        cells = []
        for position in positions:
            if position.string != string_number:
                continue
            if not position.is_member:
                label = "-"
            elif degrees:
                label = str(position.degree_label or "?")
            else:
                label = position.note.name
            if position.is_root:
                label = f"[{label}]"
            cells.append(f"{label:^5}")
        click.echo(f"{str(open_pitch):>3} |{''.join(cells)}")

    if degree is not None:
        voicing = default_voicing(positions, muted=frozenset(mute))
        names = " ".join(playback_names(voicing, ascending=True)) or "-"
        click.echo(f"Voicing: {names}")


@cli.command()
@click.argument("notes", nargs=-1, required=True, type=PITCH)
@click.option("--min-confidence", type=float, default=None, help="Minimum confidence to show")
@click.option("--limit", "-n", type=click.IntRange(min=0), default=None, help="Number of matches to show")
@click.option("--all", "show_all", is_flag=True, help="Show every candidate")
@click.option("--keys", is_flag=True, help="List the keys each chord occurs in")
@click.pass_obj
def identify(config, notes, min_confidence, limit, show_all, keys):
    """Name the chord formed by NOTES"""
    settings = config.get_config("chord_identifier")
    matches = identify_chords(notes, extra_note_penalty=settings["extra_note_penalty"])

    if not show_all:
        matches = filter_matches(
            matches,
            min_confidence=settings["min_confidence"] if min_confidence is None else min_confidence,
            limit=settings["max_matches"] if limit is None else limit,
        )

    if not matches:
        click.echo("No matching chords")
        return

    for match in matches:
        missing = _format_notes(match.missing) or "-"
        extra = _format_notes(match.extra) or "-"
        click.echo(
            f"{match.chord.display_name:<10} {match.confidence:>5.0%}  "
            f"{confidence_label(match.confidence):<12} missing: {missing:<8} extra: {extra}"
        )
        if keys:
            for membership in match.key_memberships:
                click.echo(
                    f"    {membership.roman_numeral:<5} in {membership.key.name} "
                    f"{membership.scale_kind.label}"
                )


@cli.command()
@click.argument("notes", nargs=-1, required=True, type=PITCH)
@click.option("--arpeggio", is_flag=True, help="Order notes from lowest to highest")
def play(notes, arpeggio):
    """List NOTES (with octaves) as the audio layer would receive them"""
    for note in notes:
        if note.octave is None:
            raise click.BadParameter(f"{note} needs an octave, e.g. {note}3", param_hint="NOTES")

    for name in playback_names(notes, ascending=arpeggio):
        click.echo(f"{name:<5} {frequency(parse(name)):8.2f} Hz")


def main(args: Optional[list] = None) -> int:
    """Run the CLI and return an exit code."""
    try:
        cli.main(args=args, standalone_mode=False)
    except click.exceptions.Abort:
        click.echo("Aborted!", err=True)
        return 1
    except click.ClickException as e:
        e.show()
        return e.exit_code
    return 0


if __name__ == "__main__":
    cli()
