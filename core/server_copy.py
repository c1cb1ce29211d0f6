"""
------------------------------------------------------------------------------
Project:        NIDPro
File:           core/server_copy.py
Version:        1.0.0
Producer:       thorsten.schnebeck@gmx.net
Generator:      Antigravity
Description:    Renders a single identity record as a printable bilingual
                "server verification copy" HTML document.
------------------------------------------------------------------------------
"""

import html
from datetime import datetime
from typing import Optional

from core.models.record import IdentityRecord

_STYLE = """
    body { font-family: 'Hind Siliguri', 'Inter', sans-serif; padding: 40px; color: #333; }
    .header { text-align: center; border-bottom: 2px solid #000; padding-bottom: 20px; margin-bottom: 30px; }
    .header h1 { font-size: 24px; margin: 0; text-transform: uppercase; }
    .header p { font-size: 14px; margin: 5px 0 0; font-weight: bold; }
    .data-table { width: 100%; border-collapse: collapse; }
    .data-table td { padding: 12px 5px; border-bottom: 1px solid #eee; vertical-align: top; }
    .label { font-weight: bold; width: 150px; font-size: 13px; color: #666; }
    .value-bn { font-size: 18px; font-weight: bold; margin-bottom: 2px; }
    .value-en { font-size: 14px; color: #333; text-transform: uppercase; }
    .photo-box { border: 1px solid #ccc; width: 150px; height: 180px; text-align: center; color: #ccc; font-size: 12px; }
    .signature-box { border: 1px dashed #ccc; width: 150px; height: 60px; text-align: center; color: #ccc; font-size: 10px; }
    .stamp { border: 2px solid #ddd; padding: 10px; font-weight: bold; color: #ddd; text-align: right; }
    .footer { margin-top: 50px; font-size: 11px; text-align: center; color: #999; border-top: 1px solid #eee; padding-top: 10px; }
"""


def _esc(value: Optional[str]) -> str:
    return html.escape(value or "")


class ServerCopyRenderer:
    """Templating only; no business logic."""

    TITLE = "Government of the People's Republic of Bangladesh"
    SUBTITLE = "National ID Service - Server Verification Copy"

    def _bilingual_row(self, label_bn: str, label_en: str, value_bn: Optional[str], value_en: Optional[str],
                       bn_style: str = "", en_style: str = "") -> str:
        bn_attr = f' style="{bn_style}"' if bn_style else ""
        en_attr = f' style="{en_style}"' if en_style else ""
        return (
            "<tr>"
            f'<td class="label">{label_bn}<br>{label_en}</td>'
            "<td>"
            f'<div class="value-bn"{bn_attr}>{_esc(value_bn)}</div>'
            f'<div class="value-en"{en_attr}>{_esc(value_en)}</div>'
            "</td>"
            "</tr>"
        )

    def render_html(self, record: IdentityRecord, generated_at: Optional[datetime] = None) -> str:
        """
        Builds the printable document for one record.
        The blood group row is omitted when the record has none.

        Args:
            record: The record to render.
            generated_at: Timestamp printed in the footer (now if omitted).
        """
        generated_at = generated_at or datetime.now()

        rows = [
            self._bilingual_row("নাম (বাংলা)", "Name (English)", record.full_name_bn, record.full_name_en),
            self._bilingual_row("পিতা", "Father", record.father_name_bn, record.father_name_en),
            self._bilingual_row("মাতা", "Mother", record.mother_name_bn, record.mother_name_en),
            "<tr>"
            '<td class="label">জাতীয় পরিচয়পত্র নং<br>NID No</td>'
            f'<td><div class="value-bn" style="font-size: 22px; color: #000;">{_esc(record.nid_number)}</div></td>'
            "</tr>",
            "<tr>"
            '<td class="label">জন্ম তারিখ<br>Date of Birth</td>'
            f'<td><div class="value-en" style="font-size: 18px; font-weight: bold;">{_esc(record.date_of_birth)}</div></td>'
            "</tr>",
            self._bilingual_row("ঠিকানা", "Address", record.address_bn, record.address_en,
                                bn_style="font-size: 14px;", en_style="font-size: 12px;"),
        ]

        if record.blood_group:
            rows.append(
                '<tr class="blood-group">'
                '<td class="label">রক্তের গ্রুপ<br>Blood Group</td>'
                f'<td><div class="value-en" style="font-size: 18px; font-weight: bold; color: red;">{_esc(record.blood_group)}</div></td>'
                "</tr>"
            )

        footer = (
            f"Generated on: {generated_at.strftime('%Y-%m-%d %H:%M:%S')} | "
            f"Source: {_esc(record.source_file)} | Ref: {_esc(record.id)}"
        )

        return "\n".join([
            "<!DOCTYPE html>",
            "<html>",
            "<head>",
            '<meta charset="utf-8">',
            f"<title>NID Server Copy - {_esc(record.full_name_en)}</title>",
            f"<style>{_STYLE}</style>",
            "</head>",
            "<body>",
            '<div class="header">',
            f"<h1>{self.TITLE}</h1>",
            f"<p>{self.SUBTITLE}</p>",
            "</div>",
            '<table width="100%"><tr>',
            '<td valign="top">',
            '<table class="data-table">',
            *rows,
            "</table>",
            "</td>",
            '<td valign="top" align="right" width="170">',
            '<div class="photo-box">PHOTO PLACEHOLDER</div>',
            "<br>",
            '<div class="signature-box">SIGNATURE</div>',
            "</td>",
            "</tr></table>",
            '<div class="stamp">VERIFIED RECORD</div>',
            f'<div class="footer">{footer}</div>',
            "</body>",
            "</html>",
        ])
