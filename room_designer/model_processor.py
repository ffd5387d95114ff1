"""
Server-side processing of uploaded product models.
Uses trimesh to recenter GLB files and measure their bounding box, so
catalog products get real-world dimensions for placement in the room.
"""

import io
import logging

import numpy as np
import trimesh

logger = logging.getLogger(__name__)


class ModelProcessor:
    """
    Recenter product models and report their bounds.

    GLTF/GLB is Y-up, so a model's footprint on the room floor is its
    X (width) by Z (depth) extent and Y is its height.
    """

    def process_glb(self, glb_data: bytes, origin_placement: str = 'bottom-center') -> dict:
        """
        Process a GLB file: fix bounds and recenter origin.

        Args:
            glb_data: Raw GLB file bytes
            origin_placement: Where to place origin - 'bottom-center', 'center', or 'original'

        Returns:
            dict with:
                - 'glb': Processed GLB bytes
                - 'bounds': Dict with min, max, center, size lists
                - 'original_bounds': Original bounds before processing
        """
        scene = trimesh.load(
            io.BytesIO(glb_data),
            file_type='glb',
            force='scene'  # Always load as scene (handles multi-mesh models)
        )

        if scene.is_empty:
            raise ValueError("Model contains no geometry")

        original_bounds = self._compute_bounds(scene)
        logger.info(f"Original bounds: center={original_bounds['center']}, size={original_bounds['size']}")

        if origin_placement != 'original':
            self._recenter_scene(scene, original_bounds, origin_placement)

        new_bounds = self._compute_bounds(scene)
        logger.info(f"Processed bounds: center={new_bounds['center']}, size={new_bounds['size']}")

        return {
            'glb': scene.export(file_type='glb'),
            'bounds': new_bounds,
            'original_bounds': original_bounds
        }

    def _compute_bounds(self, scene: trimesh.Scene) -> dict:
        bounds = scene.bounds  # [[min_x, min_y, min_z], [max_x, max_y, max_z]]

        if bounds is None:
            raise ValueError("Scene has no bounds (empty geometry)")

        min_pt = bounds[0]
        max_pt = bounds[1]
        center = (min_pt + max_pt) / 2
        size = max_pt - min_pt

        return {
            'min': min_pt.tolist(),
            'max': max_pt.tolist(),
            'center': center.tolist(),
            'size': size.tolist()
        }

    def _recenter_scene(self, scene: trimesh.Scene, bounds: dict, placement: str):
        """Translate the scene in place so the origin sits at `placement`."""
        center = np.array(bounds['center'])
        min_pt = np.array(bounds['min'])

        if placement == 'bottom-center':
            # Products rest on the floor: center X/Z, bottom Y at 0
            offset = np.array([-center[0], -min_pt[1], -center[2]])
        elif placement == 'center':
            offset = -center
        else:
            return

        scene.apply_transform(trimesh.transformations.translation_matrix(offset))
        logger.info(f"Applied translation offset: {offset.tolist()}")


def dimensions_from_bounds(bounds: dict) -> dict:
    """Product dimension fields (meters) from a bounds dict."""
    width, height, depth = bounds['size']
    return {
        'dim_width': round(width, 4),
        'dim_height': round(height, 4),
        'dim_depth': round(depth, 4),
        'dim_sku': 'm',
    }
