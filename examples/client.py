# client.py

import argparse
import asyncio

from typemorph import ConsoleSurface, TypeMorph

# Example content for the demo
EXAMPLE_TEXT = (
    "Hello from **typemorph**! It types _markdown_, `code` "
    "and plain text, one chunk at a time."
)

async def run(args) -> None:
    surface = ConsoleSurface(height=args.height)
    root = surface.create_container(element_id="demo")
    typer = TypeMorph(
        surface,
        parent=root,
        speed=args.speed,
        backspace_speed=args.speed / 2,
        chunk_size=args.chunk_size,
        loop_count=args.loops,
        loop_type=args.loop_type,
        parse_markdown=True,
        markdown_inline=True,
        logging_enabled=args.enable_logging,
        log_file=args.log_file,
    )
    with surface.live(root):
        try:
            await typer.start_loop(args.text)
        finally:
            typer.destroy()

def main():
    parser = argparse.ArgumentParser(description='TypeMorph demo')
    parser.add_argument('text', nargs='?', default=EXAMPLE_TEXT,
        help='Markdown text to type')
    parser.add_argument('--speed', type=float, default=0.04,
        help='Seconds per chunk')
    parser.add_argument('--chunk-size', type=int, default=1,
        help='Characters per chunk')
    parser.add_argument('--loops', type=int, default=2,
        help='Number of typing passes')
    parser.add_argument('--loop-type', choices=['clear', 'backspace'], default='backspace',
        help='How content is removed between passes')
    parser.add_argument('--height', type=int, default=None,
        help='Visible lines (defaults to the terminal height)')
    parser.add_argument('--enable-logging', action='store_true',
        help='Enable debug logging')
    parser.add_argument('--log-file',
        help='Log file path (use "-" for stdout)')
    asyncio.run(run(parser.parse_args()))

if __name__ == "__main__":
    main()
