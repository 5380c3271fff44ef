"""
Sample catalog for a fresh gallery.

A handful of artworks so that an empty hosted catalog still shows a
browsable gallery. Seeded by ``python -m artgallery.jobs.seed_catalog``.
"""

from decimal import Decimal

from artgallery.models.artwork import Artwork

SAMPLE_ARTWORKS: tuple[Artwork, ...] = (
    Artwork(
        id="sample-1",
        title="Title of Artwork 1",
        artist="Artist Name 1",
        price=Decimal("1200"),
        image_url="/img/image1.jpg",
        dimensions='24" x 36"',
        medium="Oil on Canvas",
        category="painting",
        description="A beautiful oil painting with vibrant colors and intricate details.",
        featured=True,
    ),
    Artwork(
        id="sample-2",
        title="Title of Artwork 2",
        artist="Artist Name 2",
        price=Decimal("950"),
        image_url="/img/image2.jpg",
        dimensions='18" x 24"',
        medium="Acrylic on Canvas",
        category="painting",
        description="An expressive acrylic painting showcasing modern artistic techniques.",
    ),
    Artwork(
        id="sample-3",
        title="Title of Artwork 3",
        artist="Artist Name 3",
        price=Decimal("1500"),
        image_url="/img/image3.jpg",
        dimensions='30" x 40"',
        medium="Mixed Media",
        category="mixed-media",
        description="A contemporary mixed media piece combining various textures and materials.",
        featured=True,
    ),
    Artwork(
        id="sample-4",
        title="Title of Artwork 4",
        artist="Artist Name 4",
        price=Decimal("1800"),
        image_url="/img/image4.jpg",
        dimensions='36" x 48"',
        medium="Mixed Media",
        category="mixed-media",
        description="An innovative mixed media artwork exploring themes of nature and technology.",
    ),
)


def get_sample_artworks() -> list[Artwork]:
    """The sample catalog. Ids are placeholders; the catalog assigns real ones."""
    return list(SAMPLE_ARTWORKS)
