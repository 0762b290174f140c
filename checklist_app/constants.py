from dataclasses import dataclass


@dataclass(frozen=True)
class CatalogEntry:
    key: str
    text: str
    detail: str


MANDATORY_CATALOG = (
    CatalogEntry(
        "tidur",
        "Tidur cukup",
        "⏰ Minimal 6–8 jam, tidur sebelum jam 23.00",
    ),
    CatalogEntry(
        "makan",
        "Makan anti-inflamasi",
        "🥦 Perbanyak sayur, buah, ikan\n🚫 Kurangi gorengan, gula, snack kemasan, susu sapi",
    ),
    CatalogEntry(
        "minum",
        "Minum air putih cukup",
        "💧 Target 2 liter/hari",
    ),
    CatalogEntry(
        "gerak",
        "Gerak ringan tiap hari",
        "🚶‍♀️ Jalan pagi 15–30 menit, atau peregangan ringan",
    ),
    CatalogEntry(
        "stres",
        "Kelola stres",
        "✍️ Tulis jurnal harian\n🧘‍♀️ Latihan napas 4-4-4 detik\n🗣️ Curhat, jangan pendam terus",
    ),
    CatalogEntry(
        "kimia",
        "Hindari paparan bahan kimia ringan",
        "🚫 Jangan terlalu sering pakai parfum, pewangi ruangan, plastik panas",
    ),
    CatalogEntry(
        "obat",
        "Jangan minum obat/booster sembarangan",
        "⚠️ Hati-hati konsumsi antibiotik, penghilang nyeri, suplemen berlebihan",
    ),
)

# Legacy rows carry no catalog_key; these substrings still identify them.
ALTERNATE_MATCHES = {
    "makan": "anti-inflamasi",
    "gerak": "gerak",
    "stres": "stres",
    "kimia": "kimia",
    "obat": "obat",
}

SESSION_USER_KEY = "todo_current_user"

MAX_IMAGE_BYTES = 5 * 1024 * 1024
PUBLIC_FEED_LIMIT = 100
REQUEST_TIMEOUT_SECONDS = 10

DEFAULT_TIMEZONE = "Asia/Jakarta"

MOTIVATION_MESSAGES = [
    (100, "🏆 Perfect! Kamu amazing hari ini!"),
    (75, "🌟 Hampir selesai! Keren banget!"),
    (50, "💪 Good progress! Terus semangat!"),
    (25, "🚀 Nice start! Ayo lanjutkan!"),
    (0, "✨ Fresh start! Let's do this!"),
]

MESSAGES = {
    "load_failed": "Gagal memuat data todos",
    "add_failed": "Gagal menambahkan kegiatan",
    "toggle_failed": "Gagal mengupdate kegiatan",
    "delete_failed": "Gagal menghapus kegiatan",
    "delete_mandatory": "Checklist wajib tidak bisa dihapus",
    "no_backing_row": "Checklist belum tersedia untuk hari ini",
    "empty_text": "Kegiatan tidak boleh kosong",
    "empty_name": "Nama tidak boleh kosong",
    "empty_comment": "Komentar tidak boleh kosong",
    "user_not_found": "User tidak ditemukan. Coba daftar dulu ya! 😊",
    "name_taken": "Nama sudah dipakai. Coba nama lain ya! 💫",
    "store_failed": "Terjadi kesalahan, coba lagi nanti",
    "not_image": "File harus berupa gambar",
    "image_too_large": "Ukuran file maksimal 5MB",
    "upload_failed": "Gagal upload gambar",
    "image_delete_failed": "Gagal menghapus gambar",
    "comment_failed": "Gagal menambahkan komentar",
    "stale_session": "Sesi sudah berakhir",
}
