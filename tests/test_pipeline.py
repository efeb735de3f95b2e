"""Testes de integração: texto bruto → lista de atos (parse_document / parse_single_act)."""

from __future__ import annotations

from datetime import date

import pytest

from autografos.models import ActType, NUMBER_NOT_IDENTIFIED
from autografos.normalize import clean_text
from autografos.pipeline import parse_document, parse_file, parse_single_act

pytestmark = pytest.mark.integration


class TestParseDocument:
    def test_lote_segmentado_e_deduplicado(self, batch_text):
        acts = parse_document(batch_text, "lote.docx")
        assert [a.number for a in acts] == ["1.000", "LC 45"]
        assert acts[0].title == "Lei nº 1.000, de 5 de março de 2021"
        assert acts[0].enacted_date == date(2021, 3, 5)
        assert acts[1].act_type == ActType.COMPLEMENTARY
        assert acts[1].enacted_date == date(2021, 7, 1)

    def test_atos_do_lote_completos(self, batch_text):
        first, second = parse_document(batch_text, "lote.docx")
        assert len(first.articles) == 3
        assert len(first.chapters) == 2
        art3 = first.articles[2]
        assert art3.paragraphs[0].ordinal_label == "Parágrafo único"
        assert [c.ordinal_label for c in art3.paragraphs[0].subsections[0].clauses] == ["a", "b"]
        assert len(second.articles) == 2
        assert second.summary == "Altera o Código Tributário Municipal."

    def test_paginas_repetidas_nao_criam_ato(self):
        text = (
            "Autógrafo de Lei nº 10\nDispõe sobre A.\nArt. 1º A.\n"
            "Autógrafo de Lei nº 10\nArt. 2º B.\n"
            "Autógrafo de Lei nº 11\nDispõe sobre C.\nArt. 1º C."
        )
        acts = parse_document(text, "x.docx")
        assert len(acts) == 2
        assert len(acts[0].articles) == 2
        assert acts[0].title == "Autógrafo de Lei nº 10"
        assert acts[1].title == "Autógrafo de Lei nº 11"

    def test_canonico_um_ato(self, canonical_text):
        acts = parse_document(canonical_text, "lei.txt")
        assert len(acts) == 1
        assert acts[0].number == "8.080"

    def test_sem_marcadores(self):
        raw = "Ofício circular\r\n\tencaminhado   \nà Câmara."
        acts = parse_document(raw, "oficio.txt")
        assert len(acts) == 1
        act = acts[0]
        assert act.articles == []
        assert act.full_text == clean_text(raw)
        assert act.title == "oficio.txt"
        assert act.number == NUMBER_NOT_IDENTIFIED

    def test_vazio_retorna_lista_vazia(self):
        assert parse_document("", "vazio.txt") == []
        assert parse_document(" \n\t\r\n", "vazio.txt") == []

    def test_padrao_customizado(self):
        text = "PROTOCOLO 1\nLei nº 1\nArt. 1º A.\nPROTOCOLO 2\nLei nº 2\nArt. 1º B."
        acts = parse_document(text, "x.txt", header_pattern=r"^protocolo\s+(\d+)")
        assert [a.number for a in acts] == ["1", "2"]

    def test_cabecalho_customizado_repetido_no_meio_do_artigo(self):
        text = (
            "PROT 1\nLei nº 1\nEmenta um.\nArt. 1º Início\nPROT 1\nfim.\n"
            "PROT 2\nLei nº 2\nEmenta dois.\nArt. 1º B."
        )
        acts = parse_document(text, "x.txt", header_pattern=r"^prot\s+(\d+)")
        assert [a.number for a in acts] == ["1", "2"]
        assert acts[0].articles[0].text == "Início fim."
        assert acts[0].summary == "Ementa um."

    def test_cabecalhos_sem_numero(self):
        text = "PROJETO APROVADO\nLei nº 1\nArt. 1º A.\nPROJETO APROVADO\nLei nº 2\nArt. 1º B."
        acts = parse_document(text, "x.txt", header_pattern="^PROJETO APROVADO")
        assert [a.number for a in acts] == ["1", "2"]
        assert [a.articles[0].text for a in acts] == ["A.", "B."]

    def test_nunca_levanta(self):
        for raw in ("§§§", "Art.", "CAPÍTULO", "a)\n1.\nI -", "Lei nº\nLei nº"):
            parse_document(raw, "lixo.txt")


class TestParseSingleAct:
    def test_nao_segmenta(self, batch_text):
        act = parse_single_act(batch_text, "lote.docx")
        assert act.title == "Lei nº 1.000, de 5 de março de 2021"
        assert len(act.articles) == 6

    def test_vazio_gera_ato_degenerado(self):
        act = parse_single_act("", "vazio.txt")
        assert act.title == "vazio.txt"
        assert act.number == NUMBER_NOT_IDENTIFIED
        assert act.articles == []
        assert act.full_text == ""


class TestParseFile:
    def test_docx(self, make_docx, canonical_text):
        path = make_docx(canonical_text.split("\n"), name="lei8080.docx")
        acts = parse_file(path)
        assert len(acts) == 1
        assert acts[0].title == "Lei nº 8.080, de 19 de setembro de 1990"
        assert len(acts[0].articles) == 2

    def test_txt(self, tmp_path, batch_text):
        path = tmp_path / "lote.txt"
        path.write_text(batch_text, encoding="utf-8")
        acts = parse_file(path)
        assert len(acts) == 2

    def test_identificador_e_nome_do_arquivo(self, tmp_path):
        path = tmp_path / "sem-titulo.txt"
        path.write_text("Art. 1º Texto.", encoding="utf-8")
        assert parse_file(path)[0].title == "sem-titulo.txt"
