"""Click CLI: the command-line entry point for adsb-squitter.

Commands:
  squitter decode [HEX...]        Decode frames given as arguments or --file
  squitter distance LON LAT ...   Great-circle and WGS84 3D distance
  squitter receiver               Show or update the receiver location
"""

from __future__ import annotations

import logging

import click
from rich.console import Console
from rich.table import Table

from .capture import MALFORMED, OTHER_DF, SQUITTER, CapturedFrame, FrameReader, tally
from .config import load_config, receiver_position, save_config
from .hexutil import to_hex
from .plausibility import MAX_RANGE_NM, check_range
from .position import Position

console = Console()


@click.group()
@click.version_option(version="0.1.0", prog_name="adsb-squitter")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Mode S extended squitter decoder and WGS84 position toolkit."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )


@cli.command()
@click.argument("frames", nargs=-1)
@click.option("--file", "frame_file", type=click.Path(exists=True, dir_okay=False),
              default=None, help="Read frames from a file, one per line")
def decode(frames: tuple[str, ...], frame_file: str | None):
    """Decode extended squitters and print their generic fields.

    \b
    Examples:
      squitter decode 8D4840D6202CC371C32CE0576098
      squitter decode --file data/capture.txt
    """
    if not frames and not frame_file:
        raise click.UsageError("Provide HEX frames or --file")

    captured = list(FrameReader(frames))
    if frame_file:
        captured.extend(FrameReader(frame_file))

    counts = tally(captured)
    _print_squitter_table([f for f in captured if f.squitter is not None])
    console.print("\n[bold]Summary:[/]")
    console.print(f"  Total frames:       {len(captured)}")
    console.print(f"  Extended squitters: {counts[SQUITTER]}")
    console.print(f"  Other DF:           {counts[OTHER_DF]}")
    console.print(f"  Malformed:          {counts[MALFORMED]}")


@cli.command()
@click.argument("coords", nargs=-1, type=float, required=True)
@click.option("--alt", type=float, default=None, help="Altitude of the first point (ft)")
@click.option("--alt2", type=float, default=None, help="Altitude of the second point (ft)")
def distance(coords: tuple[float, ...], alt: float | None, alt2: float | None):
    """Distance between two positions, or from the receiver to one.

    \b
    COORDS is LON LAT [LON LAT]. With a single point, the configured
    receiver is the origin and --alt is the aircraft altitude.
    \b
    Examples:
      squitter distance 13.404954 52.520008 2.349014 48.864716
      squitter distance 4.76 52.31 --alt 38000
      squitter distance -- -82.55 35.59 -83.38 35.18   # negative values
    """
    if len(coords) == 4:
        origin = Position(coords[0], coords[1], alt)
        target = Position(coords[2], coords[3], alt2)
        cfg = None
    elif len(coords) == 2:
        cfg = load_config()
        origin = receiver_position(cfg)
        if origin is None:
            raise click.UsageError(
                "Receiver location not configured; run `squitter receiver --lat .. --lon ..`"
            )
        target = Position(coords[0], coords[1], alt)
    else:
        raise click.BadParameter("expected LON LAT or LON LAT LON LAT", param_hint="COORDS")

    for pos in (origin, target):
        if not (-180 <= pos.longitude <= 180 and -90 <= pos.latitude <= 90):
            raise click.BadParameter(f"out of range: lon={pos.longitude} lat={pos.latitude}")

    surface = origin.haversine(target)
    slant = origin.wgs84_distance_3d(target)

    table = Table(title="Distance")
    table.add_column("Method")
    table.add_column("Metres", justify="right")
    table.add_column("NM", justify="right")
    for label, value in (("Haversine", surface), ("WGS84 3D", slant)):
        table.add_row(
            label,
            f"{value:,.1f}" if value is not None else "-",
            f"{value / 1852.0:,.2f}" if value is not None else "-",
        )
    console.print(table)

    if cfg is not None:
        max_range = _max_range_nm(cfg)
        if check_range(origin, target, max_range_nm=max_range):
            console.print(f"[green]Within receiver range[/] ({max_range} nm)")
        else:
            console.print(f"[bold red]Beyond receiver range[/] ({max_range} nm), position flagged implausible")


@cli.command()
@click.option("--name", type=str, default=None, help="Receiver name")
@click.option("--lat", type=click.FloatRange(-90, 90), default=None, help="Receiver latitude")
@click.option("--lon", type=click.FloatRange(-180, 180), default=None, help="Receiver longitude")
@click.option("--alt", type=float, default=None, help="Receiver altitude (ft)")
def receiver(name: str | None, lat: float | None, lon: float | None, alt: float | None):
    """Show the receiver location, or update it when options are given."""
    cfg = load_config()
    rx = cfg["receiver"]

    updates = {"name": name, "lat": lat, "lon": lon, "alt_ft": alt}
    changed = {k: v for k, v in updates.items() if v is not None}
    if changed:
        rx.update(changed)
        path = save_config(cfg)
        console.print(f"[bold]Config saved:[/] {path}")

    console.print(f"  Name:      {rx['name']}")
    console.print(f"  Latitude:  {rx['lat'] if rx['lat'] is not None else '-'}")
    console.print(f"  Longitude: {rx['lon'] if rx['lon'] is not None else '-'}")
    console.print(f"  Altitude:  {rx['alt_ft'] if rx['alt_ft'] is not None else '-'}")


def _max_range_nm(cfg: dict) -> float:
    """Configured range limit; unset falls back to the default."""
    value = (cfg.get("plausibility") or {}).get("max_range_nm")
    if value is None:
        return MAX_RANGE_NM
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise click.UsageError(f"plausibility.max_range_nm must be a number, got {value!r}")
    return float(value)


def _print_squitter_table(captured: list[CapturedFrame]):
    """Print Rich table of decoded squitters."""
    table = Table(title="Extended Squitters")
    table.add_column("DF", justify="right")
    table.add_column("ICAO", style="cyan")
    table.add_column("CA", justify="right")
    table.add_column("TC", justify="right")
    table.add_column("ME")
    table.add_column("CRC")

    for frame in captured:
        es = frame.squitter
        table.add_row(
            str(es.downlink_format),
            es.address,
            str(es.capability),
            str(es.format_type_code),
            to_hex(es.message),
            "[green]ok[/]" if frame.reply.crc_ok else "[red]bad[/]",
        )

    console.print(table)
