"""
boxquant
Lossy box quantization codecs: index map, single gradient, per-channel gradient
"""

import argparse
import logging
import sys
from pathlib import Path

logger = logging.getLogger('boxquant')


def _build_parser() -> argparse.ArgumentParser:
    from engines.registry import CODECS
    from utils.constants import DEFAULT_BOX_SIZE, DEFAULT_GRADIENT_SCALE

    parser = argparse.ArgumentParser(
        prog='boxquant',
        description='Compress images into .qimg/.gradimg/.gradrgb files and back.',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    sub = parser.add_subparsers(dest='command', required=True)

    p = sub.add_parser('compress', help='Compress an image with one of the codecs')
    p.add_argument('codec', choices=sorted(CODECS))
    p.add_argument('image', help="Source image path, or 'synthetic' for a generated checkerboard")
    p.add_argument('output', help='Output file path')
    p.add_argument('-b', '--box-size', type=int, default=DEFAULT_BOX_SIZE)
    p.add_argument('-s', '--gradient-scale', type=float, default=DEFAULT_GRADIENT_SCALE)
    p.add_argument('--preview', metavar='PNG', help='Also save the reconstruction')

    p = sub.add_parser('decode', help='Reconstruct an image from a compressed file')
    p.add_argument('input')
    p.add_argument('output', help='Output image path (format from extension)')

    p = sub.add_parser('info', help='Describe a compressed file')
    p.add_argument('input')

    return parser


def run_compress(args) -> None:
    """Compress, write the file and report quality against the source."""
    from engines.registry import get
    from models.compression_params import CompressionParams
    from utils.image_io import load_image, save_image
    from utils.metrics import compute_psnr_ssim, size_stats, Timer
    from utils.test_images import generate_colored_checkerboard

    if args.image == 'synthetic':
        print("Generating test image...")
        image = generate_colored_checkerboard(256)
    else:
        print(f"Loading: {args.image}")
        image = load_image(args.image)

    codec = get(args.codec)
    params = CompressionParams(box_size=args.box_size, gradient_scale=args.gradient_scale)

    print(f"Image: {image.shape[1]}x{image.shape[0]}")
    print(f"Codec: {args.codec}, box size {params.box_size}")

    timer = Timer()
    compressed = timer.measure_compress(codec.compress, image, params)
    data = compressed.to_bytes()
    Path(args.output).write_bytes(data)

    reconstructed = timer.measure_reconstruct(compressed.to_pixel_buffer)
    metrics = compute_psnr_ssim(image, reconstructed)
    stats = size_stats(reconstructed.shape, len(data))

    print("\n=== Results ===")
    print(f"PSNR:      {metrics['psnr_rgb']:.2f} dB")
    print(f"SSIM:      {metrics['ssim_rgb']:.4f}")
    print(f"Size:      {stats['bytes']} bytes")
    print(f"BPP:       {stats['bpp']:.3f}")
    print(f"Ratio:     {stats['compression_ratio']:.2f}:1")
    print(f"Time:      {timer.compress_time_ms + timer.reconstruct_time_ms:.2f} ms")
    print(f"\nSaved: {args.output}")

    if args.preview:
        save_image(reconstructed, args.preview)
        print(f"Saved: {args.preview}")


def run_decode(args) -> None:
    from engines.registry import decode_bytes
    from utils.image_io import save_image

    compressed = decode_bytes(Path(args.input).read_bytes())
    save_image(compressed.to_pixel_buffer(), args.output)
    print(f"Decoded {compressed.width}x{compressed.height} -> {args.output}")


def run_info(args) -> None:
    from engines.protocol import unpack_header
    from engines.registry import detect_codec

    data = Path(args.input).read_bytes()
    codec = detect_codec(data)
    kind = codec.FILE_EXTENSIONS[0]
    header = unpack_header(data, codec.MAGIC, codec.VERSIONS, kind)

    print(f"Codec:     {kind}")
    print(f"Version:   {header.version}")
    print(f"Box size:  {header.box_size}")
    print(f"Grid:      {header.boxes_wide}x{header.boxes_high} boxes")
    print(f"Records:   {header.record_count}")
    if header.gradient_scale_byte is not None:
        print(f"Gradient:  {header.gradient_scale_byte}/255")


def main(argv=None):
    from models.errors import QuantizeError

    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format='%(levelname)s %(name)s: %(message)s',
    )

    commands = {'compress': run_compress, 'decode': run_decode, 'info': run_info}
    try:
        commands[args.command](args)
    except (QuantizeError, OSError) as exc:
        logger.error("%s", exc)
        sys.exit(1)


if __name__ == '__main__':
    main()
