"""Main CLI entry point for revision-tagger."""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional, Tuple

import click
from pydantic import ValidationError
import yaml

from .batch import BatchOrchestrator, BatchResult
from .config import InspectorType, RevisionConfig
from .errors import RevisionError
from .exporters.outputs import OutputWriter, group
from .exporters.summary import SummaryRenderer
from .planner import Planner
from .processor import ImageProcessor
from .registry.daemon import DockerInspector
from .registry.imagetools import ImagetoolsPublisher
from .registry.skopeo import SkopeoClient
from .revision import next_revision
from .strategy import parse_strategy


@click.group()
def cli():
    """Revision Tagger: publishes sequential revision tags when image digests change."""
    pass


def parse_list(value: Optional[str], keep_blank: bool = False) -> List[Optional[str]]:
    """
    Parses a list input given either as a JSON array, one entry per line, or
    whitespace separated on a single line.

    Blank lines are dropped unless `keep_blank` is set, in which case they stand
    for a missing entry at that position.
    """
    if not value or not value.strip():
        return []

    text = value.strip()
    if text.startswith("["):
        try:
            items = json.loads(text)
        except ValueError as e:
            raise click.BadParameter(f"Invalid JSON list: {e}") from e
        if not isinstance(items, list):
            raise click.BadParameter("Expected a JSON list.")
    else:
        items = value.strip("\n").splitlines() if "\n" in text else text.split()

    entries = [item.strip() if isinstance(item, str) else item for item in items]
    if keep_blank:
        return [entry or None for entry in entries]
    return [entry for entry in entries if entry]


def build_processor(config: RevisionConfig) -> ImageProcessor:
    """Wires the registry tooling selected by the configuration into an ImageProcessor."""
    skopeo = SkopeoClient()
    inspector = DockerInspector() if config.inspector == InspectorType.DOCKER else skopeo
    return ImageProcessor(
        inspector=inspector,
        lister=skopeo,
        publisher=ImagetoolsPublisher(config.builder),
    )


def load_config(
    config_path: Optional[Path],
    image: Tuple[str, ...],
    images: Optional[str],
    digest: Tuple[str, ...],
    digests: Optional[str],
    **overrides,
) -> RevisionConfig:
    """Merges the optional YAML config with the command-line inputs; the command line wins."""
    data = RevisionConfig.from_yaml(config_path).model_dump() if config_path else {}

    image_list = list(image) + parse_list(images)
    if image_list:
        data["images"] = image_list
        data["single"] = len(image) == 1 and not parse_list(images)
    if not data.get("images"):
        raise click.UsageError("No image specified. Use --image, --images or --config.")

    digest_list = list(digest) + parse_list(digests, keep_blank=True)
    if digest_list:
        data["digests"] = digest_list

    platform = dict(data.get("platform") or {})
    for key in ("os", "arch", "variant"):
        value = overrides.pop(key, None)
        if value:
            platform[key] = value
    data["platform"] = platform

    data.update({key: value for key, value in overrides.items() if value is not None})
    return RevisionConfig.model_validate(data)


def report(result: BatchResult) -> None:
    for entry in result.results:
        with group(str(entry.image)):
            click.echo(f"Prior digest: {entry.prior_digest or '-'}")
            click.echo(f"Digest:       {entry.new_digest}")
            if entry.changed:
                click.secho(
                    f"Published {entry.image.tagged(entry.revision_tag)}", fg="green"
                )
            else:
                click.echo("Digest unchanged, no revision published.")


@cli.command()
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a revision config YAML.",
)
@click.option(
    "--image",
    multiple=True,
    envvar="INPUT_IMAGE",
    help="Image in 'repository:version' form. Repeat for several images.",
)
@click.option(
    "--images",
    envvar="INPUT_IMAGES",
    help="List of images, as a JSON array or one per line.",
)
@click.option(
    "--digest",
    multiple=True,
    envvar="INPUT_DIGEST",
    help="Previously recorded digest, aligned with --image.",
)
@click.option(
    "--digests",
    envvar="INPUT_DIGESTS",
    help="List of previously recorded digests, as a JSON array or one per line.",
)
@click.option(
    "--strategy",
    envvar="INPUT_STRATEGY",
    help="Revision strategy: numerical, alphabetical or alphabetical:<width>.",
)
@click.option("--os", "os_", envvar="INPUT_OS", help="Override the image OS.")
@click.option("--arch", envvar="INPUT_ARCH", help="Override the image architecture.")
@click.option("--variant", envvar="INPUT_VARIANT", help="Override the architecture variant.")
@click.option(
    "--inspector",
    type=click.Choice([t.value for t in InspectorType]),
    help="Backend used to read the current digest.",
)
@click.option("--builder", type=str, help="Buildx builder instance used to publish tags.")
@click.option(
    "-j", "--concurrency", type=int, help="Number of images processed in parallel."
)
@click.option(
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the outputs to this JSON file.",
)
@click.pass_context
def resolve(
    ctx,
    config_path: Optional[Path],
    image: Tuple[str, ...],
    images: Optional[str],
    digest: Tuple[str, ...],
    digests: Optional[str],
    strategy: Optional[str],
    os_: Optional[str],
    arch: Optional[str],
    variant: Optional[str],
    inspector: Optional[str],
    builder: Optional[str],
    concurrency: Optional[int],
    output: Optional[Path],
):
    """Publishes the next revision tag for every image whose digest changed."""
    try:
        config = load_config(
            config_path,
            image,
            images,
            digest,
            digests,
            strategy=strategy,
            os=os_,
            arch=arch,
            variant=variant,
            inspector=inspector,
            builder=builder,
            concurrency=concurrency,
        )
        padding = parse_strategy(config.strategy)
        tasks = Planner(config).plan()
    except (RevisionError, ValidationError, yaml.YAMLError) as e:
        click.secho(f"{str(e)}", fg="red")
        ctx.exit(1)

    click.echo(f"Found {len(tasks)} image(s). Strategy: {padding}")

    orchestrator = BatchOrchestrator(build_processor(config), max_workers=config.concurrency)
    try:
        result = orchestrator.run(tasks, padding, config.platform)
    except RevisionError as e:
        click.secho(f"{str(e)}", fg="red")
        ctx.exit(1)

    report(result)

    writer = OutputWriter(json_path=output)
    writer.add_result(result, single=config.single)
    writer.save()
    SummaryRenderer().append(result)

    click.secho("\nRevision check complete!", fg="green")


def _read_tags(path: str) -> Tuple[str, ...]:
    with click.open_file(path) as f:
        return tuple(line.strip() for line in f if line.strip())


@cli.command(name="next")
@click.option("--version", "version", required=True, help="Version the revision is appended to.")
@click.option("--strategy", default="", help="Revision strategy descriptor.")
@click.argument("tags", nargs=-1)
@click.pass_context
def next_tag(ctx, version: str, strategy: str, tags: Tuple[str, ...]):
    """Prints the next revision tag for the given existing TAGS ('-' reads stdin)."""
    if not tags or tags == ("-",):
        tags = _read_tags("-")

    try:
        click.echo(next_revision(tags, version, parse_strategy(strategy)))
    except RevisionError as e:
        click.secho(f"{str(e)}", fg="red", err=True)
        ctx.exit(1)


if __name__ == "__main__":
    cli()
