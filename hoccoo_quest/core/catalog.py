"""Built-in seed data: roster, action catalog, sample posts and reward cards."""

from __future__ import annotations

from .models import ActionTemplate, Person, RewardItem

DEFAULT_PEOPLE: tuple[Person, ...] = (
    Person(id="p_sales_1", department="営業", name="佐藤"),
    Person(id="p_dev_1", department="開発", name="田中"),
    Person(id="p_hr_1", department="人事", name="鈴木"),
    Person(id="p_cs_1", department="CS", name="高橋"),
    Person(id="p_mfg_1", department="製造", name="伊藤"),
)

DEFAULT_ACTIONS: tuple[ActionTemplate, ...] = (
    ActionTemplate(
        key="drink",
        label="ジュース",
        base_points=5,
        keywords=("ジュース", "自販機", "飲み物", "買った", "奢った", "差し入れ", "ドリンク"),
        text_templates=(
            "他部署の【{dept}】{name}さんに自販機でジュースを買ってみよう",
            "【{dept}】{name}さんに飲み物の差し入れをして一言ねぎらいを伝えよう",
        ),
    ),
    ActionTemplate(
        key="lunch",
        label="ランチ",
        base_points=12,
        keywords=("ランチ", "昼", "昼飯", "ご飯", "一緒に食べた", "定食", "食堂"),
        text_templates=(
            "他部署の【{dept}】{name}さんと一緒にランチに行ってみよう",
            "【{dept}】{name}さんをランチに誘って、最近の困りごとを1つ聞こう",
        ),
    ),
    ActionTemplate(
        key="coffee",
        label="コーヒー",
        base_points=8,
        keywords=("コーヒー", "カフェ", "お茶", "休憩", "一息", "飲んだ"),
        text_templates=(
            "他部署の【{dept}】{name}さんと10分だけコーヒーブレイクをしよう",
            "【{dept}】{name}さんと短い休憩を取り、最近嬉しかったことを共有しよう",
        ),
    ),
    ActionTemplate(
        key="help",
        label="助ける",
        base_points=15,
        keywords=("手伝", "助け", "対応", "レビュー", "相談", "解決", "サポート", "教えた"),
        text_templates=(
            "他部署の【{dept}】{name}さんの小さな困りごとを1つ手伝ってみよう",
            "【{dept}】{name}さんに「今、困ってることある？」と聞き、可能なら支援しよう",
        ),
    ),
    ActionTemplate(
        key="chat",
        label="雑談",
        base_points=6,
        keywords=("雑談", "話した", "会話", "あいさつ", "声かけ", "近況", "自己紹介"),
        text_templates=(
            "他部署の【{dept}】{name}さんに挨拶＋一言雑談してみよう（30秒でOK）",
            "【{dept}】{name}さんと短い会話をして、相手の業務を1つ学ぼう",
        ),
    ),
)

# (type, companion id, body) for the first-run bulletin board.
SAMPLE_POSTS: tuple[tuple[str, str, str], ...] = (
    ("chat", "p_sales_1", "今日、営業の佐藤さんと挨拶ついでに軽く雑談しました。最近忙しそう…！"),
    ("lunch", "p_dev_1", "開発の田中さんと食堂でランチ（引き直し用の投稿例）"),
    ("complete", "p_hr_1", "人事の鈴木さんに飲み物の差し入れ（自販機ジュース）しました！達成！"),
)

# Checked in this order: highest rarity first, the last tier is the fallback.
DEFAULT_RARITY_WEIGHTS: dict[str, float] = {
    "rare": 0.05,
    "uncommon": 0.15,
    "common": 0.80,
}

DEFAULT_REWARDS: tuple[RewardItem, ...] = (
    RewardItem(id="r_lunch_ticket", name="ランチ券", rarity="rare", description="社員食堂の定食1食分"),
    RewardItem(id="r_half_day", name="午後フレックス券", rarity="rare", description="好きな日の午後を早上がり"),
    RewardItem(id="r_cafe", name="カフェチケット", rarity="uncommon", description="コーヒー1杯無料"),
    RewardItem(id="r_snack", name="お菓子セット", rarity="uncommon", description="休憩室のお菓子詰め合わせ"),
    RewardItem(id="r_sticker", name="ステッカー", rarity="common", description="Hoccooロゴステッカー"),
    RewardItem(id="r_thanks", name="サンクスカード", rarity="common", description="感謝を伝えるカード1枚"),
    RewardItem(id="r_candy", name="キャンディ", rarity="common", description="のど飴ひとつ"),
)
