#!/usr/bin/env python3
"""
Example: Compile an arrangement YAML to SuperCollider and MIDI.

This demonstrates the full pipeline from arrangement definition to a
program you can evaluate in the SuperCollider IDE.

Usage:
    python examples/compile_arrangement.py
    # Creates: examples/output/two-five-one.scd
    #          examples/output/two-five-one.mid

This is the "Hello World" for chuk-mcp-sclang - proving that:
1. YAML arrangement can be loaded
2. Validation flags problems without blocking compilation
3. Clips and tracks lower to a runnable .scd program
4. The same arrangement previews as a playable MIDI file
"""

import asyncio
from pathlib import Path

from chuk_mcp_sclang.arrangement import ArrangementManager, validate_arrangement
from chuk_mcp_sclang.compiler import arrangement_to_midi, compile_arrangement


async def main() -> None:
    """Compile the demo arrangement."""
    # Paths
    examples_dir = Path(__file__).parent
    output_dir = examples_dir / "output"
    output_dir.mkdir(exist_ok=True)

    arrangement_file = examples_dir / "two-five-one.arrangement.yaml"

    print("CHUK SuperCollider Arrangement Compiler")
    print("=" * 40)
    print(f"Arrangement: {arrangement_file.name}")
    print()

    # Load the arrangement
    manager = ArrangementManager(examples_dir)
    print("Loading arrangement...")
    arrangement = await manager.load(arrangement_file)
    print(f"  Name: {arrangement.name}")
    print(f"  Clips: {', '.join(arrangement.clip_names())}")
    print(f"  Tracks: {', '.join(arrangement.track_names())}")
    print()

    # Validate
    print("Validating...")
    print(f"  {validate_arrangement(arrangement)}")
    print()

    # Compile
    print("Compiling...")
    result = compile_arrangement(arrangement)
    scd_path = result.save(output_dir / f"{arrangement.name}.scd")
    print(f"  Variables: {', '.join(result.variables)}")
    print(f"  Wrote {scd_path}")

    midi_path = output_dir / f"{arrangement.name}.mid"
    arrangement_to_midi(arrangement).save(str(midi_path))
    print(f"  Wrote {midi_path}")
    print()

    print("=" * 40)
    print("Open the .scd file in the SuperCollider IDE, boot the server")
    print("(s.boot) and evaluate the file to hear the arrangement.")


if __name__ == "__main__":
    asyncio.run(main())
