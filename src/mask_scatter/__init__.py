"""
Mask Scatter

Mask-constrained placement generator: approximate Poisson-disk positions
inside a mask, with tile, scale, rotation and depth driven by mask
brightness and a seeded random stream.
"""

__version__ = "0.1.0"

# Lazy imports so matplotlib is only loaded when previews are used
__all__ = [
    "__version__",
    "Mask",
    "MaskSampler",
    "load_mask",
    "PoissonDiskSampler",
    "poisson_sample",
    "AttributeMapper",
    "ZoneConfig",
    "TileDescriptor",
    "load_tile_metadata",
    "Placement",
    "PlacementConfig",
    "PlacementConfigError",
    "PlacementPipeline",
    "generate_placements",
    "PlacementExporter",
    "RandomStream",
    "render_preview",
]

_LOCATIONS = {
    "Mask": "mask_scatter.mask",
    "MaskSampler": "mask_scatter.mask",
    "load_mask": "mask_scatter.mask",
    "PoissonDiskSampler": "mask_scatter.sampling",
    "poisson_sample": "mask_scatter.sampling",
    "AttributeMapper": "mask_scatter.attributes",
    "ZoneConfig": "mask_scatter.attributes",
    "TileDescriptor": "mask_scatter.tiles",
    "load_tile_metadata": "mask_scatter.tiles",
    "Placement": "mask_scatter.placement",
    "PlacementConfig": "mask_scatter.placement",
    "PlacementConfigError": "mask_scatter.placement",
    "PlacementPipeline": "mask_scatter.pipeline",
    "generate_placements": "mask_scatter.pipeline",
    "PlacementExporter": "mask_scatter.exporter",
    "RandomStream": "mask_scatter.rng",
    "render_preview": "mask_scatter.preview",
}


def __getattr__(name):
    """Lazy import to avoid loading all dependencies at once."""
    if name in _LOCATIONS:
        import importlib

        module = importlib.import_module(_LOCATIONS[name])
        return getattr(module, name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
