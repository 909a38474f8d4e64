"""
Per-pillar interpretive summaries.

Plain string assembly from a chart's derived fields and static text
tables. No scoring happens here; every piece is guarded by a presence check
so a missing table entry just drops that sentence.
"""

from fourpillars.tables import POSITIONS

STEM_TEXT = {
    "甲": "甲木为参天大树，正直向上，有担当。",
    "乙": "乙木为花草藤萝，柔韧灵活，善于变通。",
    "丙": "丙火为太阳之火，热情开朗，光明磊落。",
    "丁": "丁火为灯烛之火，细腻温和，内敛有思。",
    "戊": "戊土为城墙厚土，稳重诚信，包容力强。",
    "己": "己土为田园湿土，谦和务实，善于蓄养。",
    "庚": "庚金为刀剑顽铁，刚毅果断，重义气。",
    "辛": "辛金为珠玉首饰，精致敏锐，自尊心强。",
    "壬": "壬水为江河大水，聪慧奔放，志向远大。",
    "癸": "癸水为雨露细水，温润内秀，心思缜密。",
}

# Keyed by the element character that ends every melodic-element name
NA_YIN_TEXT = {
    "金": "纳音属金，主坚毅果决。",
    "木": "纳音属木，主仁厚生发。",
    "水": "纳音属水，主灵动智慧。",
    "火": "纳音属火，主热烈进取。",
    "土": "纳音属土，主厚重守信。",
}

TEN_GOD_TEXT = {
    "比肩": "比肩主自我、同辈与独立。",
    "劫财": "劫财主竞争、冒进与人际分合。",
    "食神": "食神主才艺、口福与温和表达。",
    "伤官": "伤官主才华外露、叛逆与创新。",
    "偏财": "偏财主意外之财、慷慨与交际。",
    "正财": "正财主勤俭积累、务实与稳定收入。",
    "七杀": "七杀主压力、魄力与权威。",
    "正官": "正官主名誉、规矩与事业地位。",
    "偏印": "偏印主偏门学问、直觉与孤独。",
    "正印": "正印主学业、长辈庇护与仁慈。",
}

LIFE_STAGE_TEXT = {
    "长生": "日主临长生，生机初发。",
    "沐浴": "日主临沐浴，多变而易受诱惑。",
    "冠带": "日主临冠带，渐成而重仪表。",
    "临官": "日主临临官，自立而有作为。",
    "帝旺": "日主临帝旺，气势极盛。",
    "衰": "日主临衰地，气势渐退。",
    "病": "日主临病地，宜养不宜争。",
    "死": "日主临死地，气弱需扶。",
    "墓": "日主临墓库，主收藏积蓄。",
    "绝": "日主临绝地，旧去新来。",
    "胎": "日主临胎地，孕育新机。",
    "养": "日主临养地，得人滋养。",
}

STAR_TEXT = {
    "天乙贵人": "天乙贵人，逢凶化吉，多得贵人相助。",
    "太极贵人": "太极贵人，好学玄理，悟性高。",
    "天德贵人": "天德贵人，德行护身，灾厄减轻。",
    "月德贵人": "月德贵人，心地仁善，处事平顺。",
    "文昌贵人": "文昌贵人，聪明好学，利考试文书。",
    "福星贵人": "福星贵人，一生衣食无忧。",
    "国印贵人": "国印贵人，利掌权持印。",
    "将星": "将星，有领导才能。",
    "金舆": "金舆，主富贵安逸，利婚姻。",
    "学堂": "学堂，主学识渊博。",
    "词馆": "词馆，主文采出众。",
    "天赦": "天赦，逢凶可解。",
    "红鸾": "红鸾，主婚恋喜庆。",
    "天喜": "天喜，主喜事临门。",
    "咸池": "咸池（桃花），主异性缘佳。",
    "红艳煞": "红艳煞，多情风流。",
    "墙外桃花": "墙外桃花，感情易生枝节。",
    "驿马": "驿马，主奔波迁移。",
    "劫煞": "劫煞，防意外破耗。",
    "灾煞": "灾煞，防血光灾病。",
    "亡神": "亡神，心机深沉，防失物。",
    "禄神": "禄神，主衣禄充足。",
    "羊刃": "羊刃，性刚烈，防冲动。",
    "华盖": "华盖，聪慧孤高，近艺术宗教。",
    "孤辰": "孤辰，性喜独处。",
    "寡宿": "寡宿，六亲缘薄。",
    "天医": "天医，利医疗养生。",
    "魁罡": "魁罡，性格刚烈，聪明果断。",
    "金神": "金神，性刚而有威。",
    "孤鸾煞": "孤鸾煞，婚姻需多经营。",
    "阴差阳错": "阴差阳错，婚恋易有波折。",
    "十恶大败": "十恶大败，理财宜谨慎。",
}


def pillar_summary(chart, position: str) -> str:
    """Concatenate the static texts that apply to one pillar."""
    pillar = chart.pillars[position]
    pair = pillar.pair
    parts = [f"{pillar.name}{pair.text}（{pair.na_yin}）："]

    if pair.stem in STEM_TEXT:
        parts.append(STEM_TEXT[pair.stem])
    if pair.na_yin and pair.na_yin[-1] in NA_YIN_TEXT:
        parts.append(NA_YIN_TEXT[pair.na_yin[-1]])
    if position != "day" and pair.ten_god in TEN_GOD_TEXT:
        parts.append(f"天干为{pair.ten_god}，" + TEN_GOD_TEXT[pair.ten_god])
    if pair.life_stage in LIFE_STAGE_TEXT:
        parts.append(LIFE_STAGE_TEXT[pair.life_stage])
    if pillar.void:
        parts.append("此柱逢空亡，吉凶力减。")
    for star in pillar.stars:
        if star in STAR_TEXT:
            parts.append(STAR_TEXT[star])
    return "".join(parts)


def chart_summary(chart) -> list[str]:
    """One summary per pillar, one line for balance and pattern, then one per star combination."""
    lines = [pillar_summary(chart, p) for p in POSITIONS]
    balance = chart.balance
    pattern = chart.pattern
    favorable = "、".join(e.chinese for e in balance.favorable)
    lines.append(
        f"日主{chart.day_master}{balance.level.value}（{balance.score}分），"
        f"{balance.method.value}取用，喜{favorable}。"
        f"格局：{pattern.name}（{pattern.type.value}，{pattern.tier.value}）。"
    )
    for hit in chart.star_interactions:
        lines.append(f"{hit.name}（{'、'.join(hit.stars)}，{hit.severity.value}）：{hit.effect}")
    return lines
