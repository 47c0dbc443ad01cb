from __future__ import annotations

"""Utilities for exporting generated regions in various formats."""

from pathlib import Path
import json
import xml.etree.ElementTree as ET

from .world import World


def export_region_json(
    world: World, path: str | Path, min_cx: int, min_cy: int, max_cx: int, max_cy: int
) -> int:
    """
    Export every tile of the inclusive chunk rectangle to a JSON file.
    Returns the number of tiles written.
    """
    data = {
        "seed": world.seed,
        "chunkSize": world.chunk_size,
        "chunks": [],
    }
    count = 0
    for (cx, cy), chunk in world.region(min_cx, min_cy, max_cx, max_cy):
        tiles = [tile.to_json() for row in chunk for tile in row]
        count += len(tiles)
        data["chunks"].append({"chunkX": cx, "chunkY": cy, "tiles": tiles})
    with open(Path(path), "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return count


def export_region_xml(
    world: World, path: str | Path, min_cx: int, min_cy: int, max_cx: int, max_cy: int
) -> int:
    """Export every tile of the inclusive chunk rectangle to an XML file."""
    root = ET.Element("region", seed=str(world.seed), chunk_size=str(world.chunk_size))
    count = 0
    for (cx, cy), chunk in world.region(min_cx, min_cy, max_cx, max_cy):
        chunk_el = ET.SubElement(root, "chunk", x=str(cx), y=str(cy))
        for row in chunk:
            for tile in row:
                tile_el = ET.SubElement(
                    chunk_el,
                    "tile",
                    x=str(tile.x),
                    y=str(tile.y),
                    biome=tile.biome.value,
                    elevation=f"{tile.elevation:.4f}",
                    temperature=f"{tile.temperature:.4f}",
                    moisture=f"{tile.moisture:.4f}",
                    category=tile.elevation_category.value,
                )
                if tile.has_river:
                    tile_el.set("river", tile.river.value)
                if tile.lake:
                    tile_el.set("lake", "true")
                count += 1
    tree = ET.ElementTree(root)
    tree.write(Path(path), encoding="utf-8", xml_declaration=True)
    return count


def export_rivers_json(world: World, path: str | Path) -> None:
    """Export the traced river paths and standalone lakes of the world's seed."""
    rivers = world.rivers
    data = {
        "seed": world.seed,
        "rivers": [
            {
                "source": list(p.source),
                "tier": p.tier.value,
                "stop": p.stop_reason.value,
                "path": [list(c) for c in p.coords],
            }
            for p in rivers.paths
        ],
        "standaloneLakes": [
            {"center": list(lake.center), "radius": lake.radius} for lake in rivers.standalone_lakes
        ],
    }
    with open(Path(path), "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


__all__ = ["export_region_json", "export_region_xml", "export_rivers_json"]
