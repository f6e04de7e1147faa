"""Entry point called by the host site generator after a workspace reset.

The host passes its site object explicitly::

    from quiver_publisher.hook import on_site_reset
    on_site_reset(site)

``site`` needs a ``source`` root, a ``config`` mapping and a mutable
``exclude`` list. Config keys ``notebook_dir``, ``post_dir`` and ``img_dir``
override the defaults below.
"""

import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, List, Mapping, Optional

from quiver_publisher.core.models import PublishResult, QuiverError
from quiver_publisher.core.publisher import PublisherConfig, create_publisher_from_config

NOTEBOOK_DIR = 'quiver.qvnotebook'
POST_DIR = '_posts/quiver'
IMG_DIR = 'images/quiver'

ENV_VAR = 'APP_ENV'


@dataclass(frozen=True)
class QuiverConfig:
    """Site configuration with defaults filled in.

    ``img_dir`` stays relative: it is the path written into post links,
    while ``image_path`` is where the files go on disk.
    """
    source: Path
    notebook_dir: str
    post_dir: str
    img_dir: str

    @classmethod
    def from_site(cls, source: Path, config: Mapping[str, Any]) -> "QuiverConfig":
        return cls(
            source=Path(source),
            notebook_dir=str(config.get('notebook_dir') or NOTEBOOK_DIR),
            post_dir=str(config.get('post_dir') or POST_DIR),
            img_dir=str(config.get('img_dir') or IMG_DIR),
        )

    @property
    def notebook_path(self) -> Path:
        # Absolute notebook_dir values are kept as-is by the join
        return self.source / self.notebook_dir

    @property
    def post_path(self) -> Path:
        return self.source / self.post_dir

    @property
    def image_path(self) -> Path:
        return self.source / self.img_dir

    def to_publisher_config(self, fail_fast: bool = True) -> PublisherConfig:
        return PublisherConfig(
            notebook_path=self.notebook_path,
            post_dir=self.post_path,
            image_dir=self.image_path,
            image_url_prefix=self.img_dir,
            fail_fast=fail_fast,
        )


def is_enabled(environ: Optional[Mapping[str, str]] = None) -> bool:
    """The hook only runs outside production."""
    environ = os.environ if environ is None else environ
    return environ.get(ENV_VAR) != 'production'


def register_exclusions(exclude: List[str], config: QuiverConfig) -> None:
    """Add the output directories to the host's exclude list once each.

    Without this the host sees our writes as changes and resets again.
    """
    for path in (str(config.post_path), str(config.image_path)):
        if path not in exclude:
            exclude.append(path)


def load_posts_from_quiver(site: Any, fail_fast: bool = True) -> PublishResult:
    """Regenerate all posts for ``site``.

    Raises:
        QuiverError: A note could not be converted and fail_fast is set
    """
    config = QuiverConfig.from_site(site.source, site.config)
    register_exclusions(site.exclude, config)
    publisher = create_publisher_from_config(config.to_publisher_config(fail_fast))
    return publisher.publish_all()


def on_site_reset(site: Any, environ: Optional[Mapping[str, str]] = None) -> Optional[PublishResult]:
    """Hook body: convert the notebook, or exit the build on a fatal error."""
    if not is_enabled(environ):
        return None

    try:
        result = load_posts_from_quiver(site)
    except (QuiverError, FileNotFoundError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Converted {len(result.published_titles)} Quiver notes")
    return result
