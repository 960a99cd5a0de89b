"""
Export module for word grids.
Handles exporting generated grids to JSON, PDF and PNG.
"""

import json
import os
import logging
from typing import List, Any, Optional, Set, Tuple
from datetime import datetime

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet, ParagraphStyle
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import SimpleDocTemplate, Table, TableStyle, Paragraph, Spacer
from PIL import Image, ImageDraw, ImageFont

from wordgrid.generator import GridResult, answer_key, grid_statistics


SUPPORTED_FORMATS = ['json', 'pdf', 'png']


class ExportManager:
    """Manages export of generated word grids to various formats."""

    def __init__(self, output_dir: str = "output", font_path: Optional[str] = None):
        """Initialize export manager.

        Args:
            output_dir: Directory to save exported files
            font_path: TrueType font used for PDF and PNG output. The built-in
                PDF and bitmap fonts have no Cyrillic glyphs, so set this to a
                font such as DejaVuSans.ttf for Russian word lists.
        """
        self.output_dir = output_dir
        self.font_path = font_path
        self.logger = logging.getLogger(__name__)

        os.makedirs(output_dir, exist_ok=True)

    def export(self, result: GridResult, format_type: str,
               filename: Optional[str] = None, solution: bool = False) -> str:
        """Export a grid to the specified format.

        Args:
            result: Generated grid
            format_type: Export format (json, pdf, png)
            filename: Optional filename (auto-generated if not provided)
            solution: Highlight the placed words in PDF and PNG output

        Returns:
            Path to exported file
        """
        format_type = format_type.lower()
        if format_type not in SUPPORTED_FORMATS:
            raise ValueError(f"Unsupported format: {format_type}")

        if filename is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            filename = f"wordgrid_level{result.level}_{timestamp}.{format_type}"

        output_path = os.path.join(self.output_dir, filename)

        try:
            if format_type == 'json':
                self._export_json(result, output_path)
            elif format_type == 'pdf':
                self._export_pdf(result, output_path, solution)
            else:
                self._export_png(result, output_path, solution)

            self.logger.info(f"Exported {format_type.upper()} to {output_path}")
            return output_path

        except Exception as e:
            self.logger.error(f"Error exporting {format_type}: {e}")
            raise

    def _export_json(self, result: GridResult, output_path: str):
        """Export grid as JSON."""
        export_data = {
            'metadata': {
                'type': 'wordgrid',
                'generator': 'wordgrid',
                'created': datetime.now().isoformat(),
                'version': '1.0'
            },
            'puzzle': result.to_dict(),
            'answer_key': [''.join(row) for row in answer_key(result)],
            'statistics': grid_statistics(result)
        }

        with open(output_path, 'w', encoding='utf-8') as f:
            json.dump(export_data, f, indent=2, ensure_ascii=False)

    def _pdf_font_name(self) -> str:
        if not self.font_path:
            return 'Helvetica-Bold'

        font_name = os.path.splitext(os.path.basename(self.font_path))[0]
        if font_name not in pdfmetrics.getRegisteredFontNames():
            pdfmetrics.registerFont(TTFont(font_name, self.font_path))
        return font_name

    def _export_pdf(self, result: GridResult, output_path: str, solution: bool):
        """Export grid as PDF."""
        font_name = self._pdf_font_name()
        size = result.grid_size

        doc = SimpleDocTemplate(output_path, pagesize=A4)
        story = []
        styles = getSampleStyleSheet()

        title_style = ParagraphStyle(
            'GridTitle',
            parent=styles['Heading1'],
            fontName=font_name,
            fontSize=18,
            spaceAfter=20,
            alignment=1
        )
        words_style = ParagraphStyle(
            'GridWords',
            parent=styles['Normal'],
            fontName=font_name,
            fontSize=11
        )

        story.append(Paragraph(f"Word Search - Level {result.level}", title_style))

        # Keep the table inside the printable width for 20x20 grids
        cell_size = min(25, int(doc.width / size))
        grid_table = Table([list(row) for row in result.grid],
                           colWidths=[cell_size] * size, rowHeights=[cell_size] * size)

        grid_style = [
            ('GRID', (0, 0), (-1, -1), 0.5, colors.black),
            ('FONTNAME', (0, 0), (-1, -1), font_name),
            ('FONTSIZE', (0, 0), (-1, -1), 10),
            ('ALIGN', (0, 0), (-1, -1), 'CENTER'),
            ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ]

        if solution:
            for row, col in self._solution_cells(result):
                grid_style.append(('BACKGROUND', (col, row), (col, row), colors.lightgrey))

        grid_table.setStyle(TableStyle(grid_style))
        story.append(grid_table)
        story.append(Spacer(1, 20))

        story.append(Paragraph(", ".join(p.word for p in result.words), words_style))

        doc.build(story)

    def _load_image_fonts(self) -> Tuple[Any, Any]:
        if self.font_path:
            try:
                return (ImageFont.truetype(self.font_path, 16),
                        ImageFont.truetype(self.font_path, 12))
            except OSError as e:
                self.logger.warning(f"Could not load font {self.font_path}: {e}")

        return ImageFont.load_default(), ImageFont.load_default()

    def _export_png(self, result: GridResult, output_path: str, solution: bool):
        """Export grid as PNG image."""
        cell_size = 30
        margin = 10
        line_height = 16
        words_per_line = 5

        size = result.grid_size
        grid_pixels = size * cell_size
        word_lines = [
            [p.word for p in result.words[i:i + words_per_line]]
            for i in range(0, len(result.words), words_per_line)
        ]

        img_width = grid_pixels + 2 * margin
        img_height = grid_pixels + 3 * margin + line_height * len(word_lines)

        image = Image.new('RGB', (img_width, img_height), 'white')
        draw = ImageDraw.Draw(image)
        letter_font, word_font = self._load_image_fonts()

        highlighted = self._solution_cells(result) if solution else set()

        for row in range(size):
            for col in range(size):
                x1 = margin + col * cell_size
                y1 = margin + row * cell_size
                x2 = x1 + cell_size
                y2 = y1 + cell_size

                fill = 'lightgrey' if (row, col) in highlighted else 'white'
                draw.rectangle([x1, y1, x2, y2], fill=fill, outline='black')
                letter = result.grid[row][col]
                left, top, right, bottom = draw.textbbox((0, 0), letter, font=letter_font)
                draw.text((x1 + (cell_size - (right - left)) / 2 - left,
                           y1 + (cell_size - (bottom - top)) / 2 - top),
                          letter, fill='black', font=letter_font)

        text_y = grid_pixels + 2 * margin
        for line in word_lines:
            draw.text((margin, text_y), "  ".join(line), fill='black', font=word_font)
            text_y += line_height

        image.save(output_path, 'PNG')

    def _solution_cells(self, result: GridResult) -> Set[Tuple[int, int]]:
        return {cell for placement in result.words for cell in placement.coordinates()}

    def get_supported_formats(self) -> List[str]:
        """Get list of supported export formats."""
        return list(SUPPORTED_FORMATS)
