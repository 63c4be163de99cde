import json
import os
import sys

import click

import pickrank
from pickrank.segment import DEFAULT_MIN_ALPHA

@click.command()
@click.option('-i', "--info", default=False, is_flag=True, help="Print the header and chunk layout of the file.", show_default=True)
@click.option('-t', "--test", default=False, is_flag=True, help="Check for file corruption and report damaged chunks.", show_default=True)
@click.option('-j', "--json", "as_json", default=False, is_flag=True, help="Print ranked objects as JSON records.", show_default=True)
@click.option('-a', "--alpha", "min_alpha", default=DEFAULT_MIN_ALPHA, type=click.IntRange(0, 256), help="Ignore pick image pixels with alpha below this value.", show_default=True)
@click.option("--top", default=None, type=str, help="Top view image to label with the ranking of SOURCE.")
@click.option('-o', "--output", default=None, type=str, help="Where to write the labeled top view. Default: <top>.annotated.png")
@click.argument("source", nargs=-1)
def main(info, test, as_json, min_alpha, top, output, source):
	"""
	Rank the color coded objects of pick images (8-bit RGBA .png)
	by redness and optionally label a top view image with the ranks.
	"""
	for i in range(len(source)):
		if source[i] == "-":
			source = source[:i] + tuple(( line.strip() for line in sys.stdin.readlines() )) + source[i+1:]

	if top is not None and len(source) != 1:
		print("pickrank: --top requires exactly one pick image.")
		sys.exit(1)

	for src in source:
		if info:
			print_header(src)
			continue
		elif test:
			check_binary(src)
			continue

		objects = print_objects(src, min_alpha, as_json)
		if objects is not None and top is not None:
			annotate_file(top, objects, output)

def load_binary(src):
	try:
		return pickrank.bload(src)
	except FileNotFoundError:
		print(f"pickrank: File \"{src}\" does not exist.")
		return None

def check_binary(src):
	binary = load_binary(src)
	if binary is None:
		return

	print(f"testing {src}...")

	report = pickrank.codec.check(binary)

	def pretty(human, key):
		if report[key] == True:
			print(f"{human} ok.")
		elif report[key] == False:
			print(f"{human} damaged.")
		elif report[key] is None:
			print(f"{human} not checked.")

	pretty("signature", "signature")
	pretty("chunks", "chunks")
	pretty("header", "header")
	pretty("pixels", "pixels")

	if report["crc"] is None:
		print("checksums not checked.")
	elif report["crc"] == [] and report["missing_crc"] == []:
		print("checksums ok.")
	else:
		if report["crc"]:
			print(f"checksums damaged: { ','.join(report['crc']) }")
		if report["missing_crc"]:
			print(f"checksums missing: { ','.join(report['missing_crc']) }")

	print("done.")

def print_header(src):
	binary = load_binary(src)
	if binary is None:
		return

	try:
		head = pickrank.header(binary)
		chunks = pickrank.component_lengths(binary)
	except pickrank.FormatError as err:
		print("pickrank:", err)
		return

	print(f"Filename: {src}")
	for key,val in head.__dict__.items():
		print(f"{key}: {val}")
	print(f"chunks: {' '.join(( f'{name}({length})' for name, length in chunks ))}")
	print()

def print_objects(src, min_alpha, as_json):
	binary = load_binary(src)
	if binary is None:
		return None

	try:
		objects = pickrank.parse_object_ordering(binary, min_alpha=min_alpha)
	except pickrank.FormatError as err:
		print("pickrank:", err)
		return None

	if as_json:
		print(json.dumps([ obj.to_dict() for obj in objects ]))
		return objects

	print(f"Filename: {src}")
	for obj in objects:
		r,g,b,a = obj.color
		x,y = obj.centroid
		print(
			f"{obj.rank}: rgba({r},{g},{b},{a}) pixels={obj.pixel_count} "
			f"centroid=({x:.2f},{y:.2f}) intensity={obj.intensity:g}"
		)
	print()
	return objects

def annotate_file(top, objects, output):
	binary = load_binary(top)
	if binary is None:
		return

	try:
		annotated = pickrank.annotate_top_image(binary, objects)
	except pickrank.FormatError as err:
		print("pickrank:", err)
		return

	if annotated is None:
		print(f"pickrank: {top} is empty.")
		return

	if output is None:
		output = f"{removesuffix(top, '.png')}.annotated.png"

	pickrank.save(annotated, output)

	try:
		stat = os.stat(output)
		if stat.st_size == 0:
			raise ValueError("File is zero length.")
	except (FileNotFoundError, ValueError) as err:
		print(f"pickrank: Unable to write {output}. Aborting.")
		sys.exit(1)

def removesuffix(x:str, suffix:str) -> str:
  if x.endswith(suffix):
    x = x[:-len(suffix)]
  return x
